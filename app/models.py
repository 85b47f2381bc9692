import uuid
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Date, Text, Float, JSON
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.sql import func
from .database import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


# Arreglo nativo en Postgres; JSON en SQLite (tests)
StringArray = ARRAY(String).with_variant(JSON(), "sqlite")


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=True)
    role = Column(String, default="user")
    avatar_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    status = Column(String, default="planning") # planning, active, on-hold, completed, cancelled
    priority = Column(String, default="medium") # low, medium, high, urgent

    start_date = Column(Date, nullable=True)
    deadline = Column(Date, nullable=True)

    progress = Column(Integer, default=0) # 0-100
    budget = Column(Float, nullable=True)

    # Referencias sin FK (no se validan en la aplicación)
    team_id = Column(String, nullable=True)
    client_id = Column(String, nullable=True)
    created_by = Column(String, index=True, nullable=True)

    is_favorite = Column(Boolean, default=False)
    tags = Column(StringArray, nullable=True)
    color = Column(String(7), default="#3B82F6")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    status = Column(String, default="todo") # todo, in_progress, done
    priority = Column(String, default="medium") # low, medium, high
    due_date = Column(Date, nullable=True)

    assigned_to = Column(String, index=True, nullable=True) # User ID
    project_id = Column(String, index=True, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    photo_url = Column(String, nullable=True)
    is_individual = Column(Boolean, default=False)

    company = Column(String, nullable=True)
    source = Column(String, nullable=True)
    position = Column(String, nullable=True)
    position_description = Column(Text, nullable=True)

    # Contacto
    email = Column(String, nullable=True)
    phone_numbers = Column(Text, default="[]") # JSON
    skype = Column(String, nullable=True)
    linkedin = Column(String, nullable=True)
    additional_links = Column(Text, default="[]") # JSON: [{type, url}]

    # Dirección
    address_line1 = Column(String, nullable=True)
    address_line2 = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    country = Column(String, nullable=True)

    description = Column(Text, nullable=True)
    status = Column(String, default="active") # active, inactive, pending

    created_by = Column(String, index=True, nullable=True)
    join_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


class CalendarEvent(Base):
    __tablename__ = "calendar_events"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    event_type = Column(String, default="event")

    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    all_day = Column(Boolean, default=False)

    location = Column(String, nullable=True)
    calendar_name = Column(String, default="General")
    priority = Column(String, default="medium")
    status = Column(String, default="scheduled")

    tags = Column(Text, default="[]") # JSON
    reminders = Column(Text, default="[]") # JSON

    created_by = Column(String, index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
