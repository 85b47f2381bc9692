from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional, Literal
from datetime import date, datetime

from workhub_common.json_fields import parse_json_list

# --- UTILIDADES ---

ProjectStatus = Literal["planning", "active", "on-hold", "completed", "cancelled"]
ProjectPriority = Literal["low", "medium", "high", "urgent"]
TaskStatus = Literal["todo", "in_progress", "done"]
TaskPriority = Literal["low", "medium", "high"]
TeamMemberStatus = Literal["active", "inactive", "pending"]


def _empty_date_to_none(value):
    # Los formularios envían "" para borrar una fecha
    return None if value == "" else value


class CamelModel(BaseModel):
    """Entrada/salida en camelCase, aceptando también snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

# --- AUTH ---

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: str

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    role: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class LoginResponse(UserResponse):
    access_token: str
    token_type: str = "bearer"

# --- PROYECTOS ---

class ProjectCreate(BaseModel):
    name: str = Field(..., description="Nombre del proyecto")
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[ProjectPriority] = None
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    budget: Optional[float] = None
    team_id: Optional[str] = None
    client_id: Optional[str] = None
    created_by: Optional[str] = None
    is_favorite: Optional[bool] = None
    tags: Optional[List[str]] = None
    color: Optional[str] = None

    _blank_dates = field_validator("start_date", "deadline", mode="before")(_empty_date_to_none)

class ProjectUpdate(BaseModel):
    """Campos opcionales; solo se actualizan los que vienen en el JSON."""
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[ProjectPriority] = None
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    budget: Optional[float] = None
    team_id: Optional[str] = None
    client_id: Optional[str] = None
    created_by: Optional[str] = None
    is_favorite: Optional[bool] = None
    tags: Optional[List[str]] = None
    color: Optional[str] = None

    _blank_dates = field_validator("start_date", "deadline", mode="before")(_empty_date_to_none)

class ProjectResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    progress: Optional[int] = None
    budget: Optional[float] = None
    team_id: Optional[str] = None
    client_id: Optional[str] = None
    created_by: Optional[str] = None
    is_favorite: Optional[bool] = None
    tags: List[str] = []
    color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_tags(cls, value):
        return parse_json_list(value)

# --- TAREAS ---

class TaskCreate(BaseModel):
    title: str = Field(..., description="Título de la tarea")
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    project_id: Optional[str] = None
    assigned_to: Optional[str] = None
    # Campos heredados del frontend: dueño de la tarea
    user_id: Optional[str] = None
    user_name: Optional[str] = None

    _blank_due_date = field_validator("due_date", mode="before")(_empty_date_to_none)

class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    assigned_to: Optional[str] = None
    project_id: Optional[str] = None

    _blank_due_date = field_validator("due_date", mode="before")(_empty_date_to_none)

class TaskResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    assigned_to: Optional[str] = None
    project_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

# --- EQUIPO ---

class AdditionalLink(BaseModel):
    type: str
    url: str

class TeamMemberCreate(CamelModel):
    first_name: str
    last_name: str
    photo_url: Optional[str] = None
    is_individual: Optional[bool] = None
    company: Optional[str] = None
    source: Optional[str] = None
    position: Optional[str] = None
    position_description: Optional[str] = None
    email: Optional[str] = None
    phone_numbers: Optional[List[str]] = None
    skype: Optional[str] = None
    linkedin: Optional[str] = None
    additional_links: Optional[List[AdditionalLink]] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    zip_code: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TeamMemberStatus] = None
    created_by: Optional[str] = None

class TeamMemberUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo_url: Optional[str] = None
    is_individual: Optional[bool] = None
    company: Optional[str] = None
    source: Optional[str] = None
    position: Optional[str] = None
    position_description: Optional[str] = None
    email: Optional[str] = None
    phone_numbers: Optional[List[str]] = None
    skype: Optional[str] = None
    linkedin: Optional[str] = None
    additional_links: Optional[List[AdditionalLink]] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    zip_code: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TeamMemberStatus] = None

class TeamMemberResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    photo_url: Optional[str] = None
    is_individual: Optional[bool] = None
    company: Optional[str] = None
    source: Optional[str] = None
    position: Optional[str] = None
    position_description: Optional[str] = None
    email: Optional[str] = None
    phone_numbers: List[str] = []
    skype: Optional[str] = None
    linkedin: Optional[str] = None
    additional_links: List[AdditionalLink] = []
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    zip_code: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    created_by: Optional[str] = None
    join_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("phone_numbers", mode="before")
    @classmethod
    def _parse_phone_numbers(cls, value):
        return [phone for phone in parse_json_list(value) if isinstance(phone, str)]

    @field_validator("additional_links", mode="before")
    @classmethod
    def _parse_additional_links(cls, value):
        # Se descartan los elementos guardados que no son {type, url}
        links = []
        for item in parse_json_list(value):
            try:
                links.append(AdditionalLink.model_validate(item))
            except ValidationError:
                continue
        return links

# --- CALENDARIO ---

class CalendarEventCreate(CamelModel):
    title: str
    description: Optional[str] = None
    event_type: Optional[str] = None
    start_date: datetime
    end_date: datetime
    all_day: Optional[bool] = None
    location: Optional[str] = None
    calendar_name: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None
    reminders: Optional[List[str]] = None
    created_by: Optional[str] = None

class CalendarEventUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    event_type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    all_day: Optional[bool] = None
    location: Optional[str] = None
    calendar_name: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None
    reminders: Optional[List[str]] = None

class CalendarEventResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    event_type: Optional[str] = None
    start_date: datetime
    end_date: datetime
    all_day: Optional[bool] = None
    location: Optional[str] = None
    calendar_name: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    tags: List[str] = []
    reminders: List[str] = []
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", "reminders", mode="before")
    @classmethod
    def _parse_json_lists(cls, value):
        return parse_json_list(value)
