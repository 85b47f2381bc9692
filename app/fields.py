"""
Listas blancas de campos actualizables por entidad.

El orden de cada tabla es el orden del SET generado. Añadir un campo
actualizable es añadir una línea aquí (y la columna en `models`).
"""
from workhub_common.patching import FieldKind, PatchSchema, field
from . import models

TEXT = FieldKind.TEXT
NULLABLE = FieldKind.NULLABLE_TEXT
NUMBER = FieldKind.NUMBER
BOOLEAN = FieldKind.BOOLEAN
ENUM = FieldKind.ENUM
DATE = FieldKind.DATE
DATETIME = FieldKind.DATETIME

PROJECT_FIELDS = PatchSchema(models.Project.__table__, "Proyecto", [
    field("name"),
    field("description", NULLABLE),
    field("status", ENUM),
    field("priority", ENUM),
    field("start_date", DATE),
    field("deadline", DATE),
    field("progress", NUMBER),
    field("budget", NUMBER),
    field("team_id", NULLABLE),
    field("client_id", NULLABLE),
    field("created_by", NULLABLE),
    field("is_favorite", BOOLEAN),
    field("tags", FieldKind.STRING_LIST),
    field("color"),
])

TASK_FIELDS = PatchSchema(models.Task.__table__, "Tarea", [
    field("title"),
    field("description", NULLABLE),
    field("status", ENUM),
    field("priority", ENUM),
    field("due_date", DATE),
    field("assigned_to", NULLABLE),
    field("project_id", NULLABLE),
])

TEAM_MEMBER_FIELDS = PatchSchema(models.TeamMember.__table__, "Miembro del equipo", [
    field("firstName", TEXT, "first_name"),
    field("lastName", TEXT, "last_name"),
    field("photoUrl", NULLABLE, "photo_url"),
    field("isIndividual", BOOLEAN, "is_individual"),
    field("company", NULLABLE),
    field("source", NULLABLE),
    field("position", NULLABLE),
    field("positionDescription", NULLABLE, "position_description"),
    field("email", NULLABLE),
    field("phoneNumbers", FieldKind.JSON_LIST, "phone_numbers"),
    field("skype", NULLABLE),
    field("linkedin", NULLABLE),
    field("additionalLinks", FieldKind.JSON_LIST, "additional_links"),
    field("addressLine1", NULLABLE, "address_line1"),
    field("addressLine2", NULLABLE, "address_line2"),
    field("zipCode", NULLABLE, "zip_code"),
    field("city", NULLABLE),
    field("state", NULLABLE),
    field("country", NULLABLE),
    field("description", NULLABLE),
    field("status", ENUM),
])

CALENDAR_EVENT_FIELDS = PatchSchema(models.CalendarEvent.__table__, "Evento", [
    field("title"),
    field("description", NULLABLE),
    field("eventType", TEXT, "event_type"),
    field("startDate", DATETIME, "start_date"),
    field("endDate", DATETIME, "end_date"),
    field("allDay", BOOLEAN, "all_day"),
    field("location", NULLABLE),
    field("calendarName", TEXT, "calendar_name"),
    field("priority", ENUM),
    field("status", ENUM),
    field("tags", FieldKind.JSON_LIST),
    field("reminders", FieldKind.JSON_LIST),
])
