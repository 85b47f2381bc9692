import logging
from typing import Optional, Dict, Any, List
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from workhub_common.json_fields import encode_json_list
from workhub_common.patching import apply_patch, utcnow
from workhub_common.security import hash_password
from . import models, schemas
from .fields import PROJECT_FIELDS, TASK_FIELDS, TEAM_MEMBER_FIELDS, CALENDAR_EVENT_FIELDS

logger = logging.getLogger("workhub-api")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None

async def _delete_returning(db: AsyncSession, model, entity_id: str) -> Optional[Dict[str, Any]]:
    """DELETE físico; devuelve la fila eliminada o None si no existía."""
    table = model.__table__
    stmt = delete(table).where(table.c.id == entity_id).returning(*table.c)
    result = await db.execute(stmt)
    row = result.mappings().first()
    deleted = dict(row) if row is not None else None
    await db.commit()
    return deleted

# --- USUARIOS ---

async def get_user_by_email(db: AsyncSession, email: str):
    query = select(models.User).filter(models.User.email == email)
    result = await db.execute(query)
    return result.scalars().first()

async def get_user_by_id(db: AsyncSession, user_id: str):
    return await db.get(models.User, user_id)

async def create_user(db: AsyncSession, data: schemas.RegisterRequest) -> models.User:
    """Registra un usuario con la contraseña hasheada (bcrypt)."""
    now = utcnow()
    db_user = models.User(
        email=data.email,
        password=hash_password(data.password),
        name=data.name,
        role="user",
        created_at=now,
        updated_at=now,
    )
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)
    return db_user

# --- PROYECTOS ---

async def create_project(db: AsyncSession, project: schemas.ProjectCreate) -> models.Project:
    """
    Crea un nuevo proyecto.

    Los valores por defecto se aplican solo aquí (creación); en la
    actualización se respeta el valor literal del patch.
    """
    now = utcnow()
    db_project = models.Project(
        name=project.name,
        description=_blank_to_none(project.description),
        status=project.status or "planning",
        priority=project.priority or "medium",
        start_date=project.start_date,
        deadline=project.deadline,
        progress=project.progress or 0,
        budget=project.budget,
        team_id=_blank_to_none(project.team_id),
        client_id=_blank_to_none(project.client_id),
        created_by=project.created_by or None,
        is_favorite=project.is_favorite or False,
        tags=project.tags or [],
        color=project.color or "#3B82F6",
        created_at=now,
        updated_at=now,
    )
    db.add(db_project)
    await db.commit()
    await db.refresh(db_project)
    logger.info(f"✅ Proyecto creado: {db_project.id}")
    return db_project

async def get_projects(db: AsyncSession, created_by: Optional[str] = None) -> List[models.Project]:
    """Lista de proyectos, los más recientes primero."""
    query = select(models.Project)
    if created_by:
        query = query.filter(models.Project.created_by == created_by)
    query = query.order_by(models.Project.created_at.desc())
    result = await db.execute(query)
    return result.scalars().all()

async def get_project_by_id(db: AsyncSession, project_id: str):
    return await db.get(models.Project, project_id)

async def update_project(db: AsyncSession, project_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
    return await apply_patch(db, PROJECT_FIELDS, project_id, patch)

async def delete_project(db: AsyncSession, project_id: str):
    return await _delete_returning(db, models.Project, project_id)

# --- TAREAS ---

async def create_task(db: AsyncSession, task: schemas.TaskCreate) -> models.Task:
    """Crea una tarea. `assigned_to` cae en `user_id` si no viene."""
    now = utcnow()
    db_task = models.Task(
        title=task.title,
        description=task.description or None,
        status=task.status or "todo",
        priority=task.priority or "medium",
        due_date=task.due_date,
        assigned_to=task.assigned_to or task.user_id or None,
        project_id=task.project_id or None,
        created_at=now,
        updated_at=now,
    )
    db.add(db_task)
    await db.commit()
    await db.refresh(db_task)
    logger.info(f"✅ Tarea creada: {db_task.id}")
    return db_task

async def get_tasks(db: AsyncSession, assigned_to: Optional[str] = None) -> List[models.Task]:
    query = select(models.Task)
    if assigned_to:
        query = query.filter(models.Task.assigned_to == assigned_to)
    query = query.order_by(models.Task.created_at.desc())
    result = await db.execute(query)
    return result.scalars().all()

async def get_task_by_id(db: AsyncSession, task_id: str):
    return await db.get(models.Task, task_id)

async def update_task(db: AsyncSession, task_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
    return await apply_patch(db, TASK_FIELDS, task_id, patch)

async def delete_task(db: AsyncSession, task_id: str):
    return await _delete_returning(db, models.Task, task_id)

# --- EQUIPO ---

async def create_team_member(db: AsyncSession, member: schemas.TeamMemberCreate) -> models.TeamMember:
    """Registra un miembro del equipo; las listas se guardan como JSON."""
    now = utcnow()
    links = [link.model_dump() for link in member.additional_links or []]
    db_member = models.TeamMember(
        first_name=member.first_name,
        last_name=member.last_name,
        photo_url=member.photo_url or None,
        is_individual=member.is_individual or False,
        company=member.company or None,
        source=member.source or None,
        position=member.position or None,
        position_description=member.position_description or None,
        email=member.email or None,
        phone_numbers=encode_json_list(member.phone_numbers),
        skype=member.skype or None,
        linkedin=member.linkedin or None,
        additional_links=encode_json_list(links),
        address_line1=member.address_line1 or None,
        address_line2=member.address_line2 or None,
        zip_code=member.zip_code or None,
        city=member.city or None,
        state=member.state or None,
        country=member.country or None,
        description=member.description or None,
        status=member.status or "active",
        created_by=member.created_by or None,
        join_date=now,
        created_at=now,
        updated_at=now,
    )
    db.add(db_member)
    await db.commit()
    await db.refresh(db_member)
    logger.info(f"✅ Miembro del equipo creado: {db_member.id}")
    return db_member

async def get_team_members(db: AsyncSession, created_by: Optional[str] = None) -> List[models.TeamMember]:
    query = select(models.TeamMember)
    if created_by:
        query = query.filter(models.TeamMember.created_by == created_by)
    query = query.order_by(models.TeamMember.created_at.desc())
    result = await db.execute(query)
    return result.scalars().all()

async def get_team_member_by_id(db: AsyncSession, member_id: str):
    return await db.get(models.TeamMember, member_id)

async def update_team_member(db: AsyncSession, member_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
    return await apply_patch(db, TEAM_MEMBER_FIELDS, member_id, patch)

async def delete_team_member(db: AsyncSession, member_id: str):
    return await _delete_returning(db, models.TeamMember, member_id)

# --- CALENDARIO ---

async def create_calendar_event(db: AsyncSession, event: schemas.CalendarEventCreate) -> models.CalendarEvent:
    now = utcnow()
    db_event = models.CalendarEvent(
        title=event.title,
        description=event.description or None,
        event_type=event.event_type or "event",
        start_date=event.start_date,
        end_date=event.end_date,
        all_day=event.all_day or False,
        location=event.location or None,
        calendar_name=event.calendar_name or "General",
        priority=event.priority or "medium",
        status=event.status or "scheduled",
        tags=encode_json_list(event.tags),
        reminders=encode_json_list(event.reminders),
        created_by=event.created_by or None,
        created_at=now,
        updated_at=now,
    )
    db.add(db_event)
    await db.commit()
    await db.refresh(db_event)
    logger.info(f"📅 Evento creado: {db_event.id}")
    return db_event

async def get_calendar_events(db: AsyncSession, created_by: Optional[str] = None) -> List[models.CalendarEvent]:
    """Eventos ordenados por fecha de inicio (ascendente)."""
    query = select(models.CalendarEvent)
    if created_by:
        query = query.filter(models.CalendarEvent.created_by == created_by)
    query = query.order_by(models.CalendarEvent.start_date.asc())
    result = await db.execute(query)
    return result.scalars().all()

async def get_calendar_event_by_id(db: AsyncSession, event_id: str):
    return await db.get(models.CalendarEvent, event_id)

async def update_calendar_event(db: AsyncSession, event_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
    return await apply_patch(db, CALENDAR_EVENT_FIELDS, event_id, patch)

async def delete_calendar_event(db: AsyncSession, event_id: str):
    return await _delete_returning(db, models.CalendarEvent, event_id)
