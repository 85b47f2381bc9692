import re
from datetime import date, datetime, timezone

import pytest
from sqlalchemy import Column, Date, MetaData, String, Table, Text, DateTime
from sqlalchemy.dialects.postgresql import asyncpg

from workhub_common.patching import FieldKind, NotFoundError, PatchSchema, apply_patch, fetch_row, field
from app import crud, schemas
from app.fields import PROJECT_FIELDS, TASK_FIELDS, TEAM_MEMBER_FIELDS, CALENDAR_EVENT_FIELDS


def _notes_schema():
    metadata = MetaData()
    table = Table(
        "notes", metadata,
        Column("id", String, primary_key=True),
        Column("title", String),
        Column("body", Text),
        Column("due", Date),
        Column("labels", Text),
        Column("owner_name", String),
        Column("updated_at", DateTime(timezone=True)),
    )
    return PatchSchema(table, "Nota", [
        field("title"),
        field("body", FieldKind.NULLABLE_TEXT),
        field("due", FieldKind.DATE),
        field("labels", FieldKind.JSON_LIST),
        field("ownerName", FieldKind.NULLABLE_TEXT, "owner_name"),
    ])


def _set_columns(sql):
    set_clause = re.search(r"SET (.*) WHERE", sql, re.S).group(1)
    return [part.split("=")[0].strip() for part in set_clause.split(",")]


# --- CONSTRUCCIÓN DEL SET ---

def test_assignments_follow_field_table_order_not_patch_order():
    schema = _notes_schema()
    pairs = schema.assignments({"labels": ["x"], "title": "Nueva", "body": "texto"})
    assert [column for column, _ in pairs] == ["title", "body", "labels"]


def test_empty_string_clears_nullable_text_only():
    schema = _notes_schema()
    pairs = dict(schema.assignments({"title": "", "body": ""}))
    assert pairs == {"title": "", "body": None}


def test_explicit_none_is_kept():
    schema = _notes_schema()
    assert schema.assignments({"title": None}) == [("title", None)]


def test_unknown_keys_are_ignored():
    schema = _notes_schema()
    patch = {"title": "ok", "id": "hack", "updated_at": "x", "drop_table": 1}
    assert schema.assignments(patch) == [("title", "ok")]
    assert set(schema.ignored_keys(patch)) == {"id", "updated_at", "drop_table"}


def test_external_and_column_names_are_both_accepted():
    schema = _notes_schema()
    assert schema.assignments({"ownerName": "Ana"}) == [("owner_name", "Ana")]
    assert schema.assignments({"owner_name": "Ana"}) == [("owner_name", "Ana")]
    assert schema.assignments({"ownerName": "Ana", "owner_name": "Luis"}) == [("owner_name", "Ana")]


def test_type_coercions():
    schema = _notes_schema()
    pairs = dict(schema.assignments({"due": "2026-03-01", "labels": ["a", "b"]}))
    assert pairs["due"] == date(2026, 3, 1)
    assert pairs["labels"] == '["a", "b"]'

    pairs = dict(schema.assignments({"due": "", "labels": None}))
    assert pairs == {"due": None, "labels": "[]"}


def test_datetime_kind_parses_iso_strings():
    pairs = dict(CALENDAR_EVENT_FIELDS.assignments({"startDate": "2026-05-01T10:00:00Z"}))
    assert pairs["start_date"] == datetime(2026, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_schema_rejects_unknown_columns_and_reserved_columns():
    schema = _notes_schema()
    with pytest.raises(ValueError):
        PatchSchema(schema.table, "Nota", [field("missing")])
    with pytest.raises(ValueError):
        PatchSchema(schema.table, "Nota", [field("updated_at")])
    with pytest.raises(ValueError):
        PatchSchema(schema.table, "Nota", [field("title"), field("title")])


def test_entity_field_tables_are_complete():
    assert PROJECT_FIELDS.columns == [
        "name", "description", "status", "priority", "start_date", "deadline", "progress",
        "budget", "team_id", "client_id", "created_by", "is_favorite", "tags", "color",
    ]
    assert TASK_FIELDS.columns == [
        "title", "description", "status", "priority", "due_date", "assigned_to", "project_id",
    ]
    assert [f.name for f in TEAM_MEMBER_FIELDS.fields] == [
        "firstName", "lastName", "photoUrl", "isIndividual", "company", "source", "position",
        "positionDescription", "email", "phoneNumbers", "skype", "linkedin", "additionalLinks",
        "addressLine1", "addressLine2", "zipCode", "city", "state", "country", "description", "status",
    ]
    assert [f.name for f in CALENDAR_EVENT_FIELDS.fields] == [
        "title", "description", "eventType", "startDate", "endDate", "allDay", "location",
        "calendarName", "priority", "status", "tags", "reminders",
    ]


# --- FORMA DEL SQL ---

def test_update_statement_shape_is_deterministic():
    dialect = asyncpg.dialect()
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    first = PROJECT_FIELDS.update_statement("p-1", PROJECT_FIELDS.assignments({"status": "active", "name": "X"}), now)
    second = PROJECT_FIELDS.update_statement("p-1", PROJECT_FIELDS.assignments({"name": "Y", "status": "done"}), now)

    sql_first = str(first.compile(dialect=dialect))
    sql_second = str(second.compile(dialect=dialect))

    assert sql_first == sql_second
    assert _set_columns(sql_first) == ["name", "status", "updated_at"]
    # SET usa $1..$3 y el id es el último parámetro
    assert re.search(r"WHERE projects\.id\s*=\s*\$4", sql_first)
    assert "RETURNING" in sql_first


# --- EJECUCIÓN CONTRA LA BASE ---

async def _task(db, **overrides):
    data = {"title": "Fix bug", "description": "Stack trace en login", "priority": "high"}
    data.update(overrides)
    return await crud.create_task(db, schemas.TaskCreate(**data))


async def _project(db):
    return await crud.create_project(db, schemas.ProjectCreate(
        name="Web", description="Sitio", deadline="2026-09-30", budget=1200.5, tags=["web"],
    ))


async def _member(db):
    return await crud.create_team_member(db, schemas.TeamMemberCreate(
        first_name="Ana", last_name="Pérez", company="Acme", phone_numbers=["111"],
        additional_links=[{"type": "web", "url": "https://ana.dev"}],
    ))


async def _event(db):
    return await crud.create_calendar_event(db, schemas.CalendarEventCreate(
        title="Demo", start_date="2026-05-01T10:00:00Z", end_date="2026-05-01T11:00:00Z",
        tags=["cliente"], location="Sala 1",
    ))


@pytest.mark.parametrize("create, schema, patch, column, expected", [
    (_task, TASK_FIELDS, {"status": "done"}, "status", "done"),
    (_project, PROJECT_FIELDS, {"progress": 55}, "progress", 55),
    (_member, TEAM_MEMBER_FIELDS, {"positionDescription": "Lidera QA"}, "position_description", "Lidera QA"),
    (_event, CALENDAR_EVENT_FIELDS, {"location": "Sala 2"}, "location", "Sala 2"),
], ids=["task", "project", "team_member", "calendar_event"])
async def test_single_field_patch_only_touches_that_column(db, create, schema, patch, column, expected):
    entity = await create(db)
    before = await fetch_row(db, schema, entity.id)

    after = await apply_patch(db, schema, entity.id, patch)

    assert after[column] == expected
    assert after["updated_at"] > before["updated_at"]
    for name, value in before.items():
        if name not in (column, "updated_at"):
            assert after[name] == value, name


async def test_empty_patch_is_a_noop(db, statements):
    task = await _task(db)
    before = await fetch_row(db, TASK_FIELDS, task.id)
    statements.clear()

    result = await apply_patch(db, TASK_FIELDS, task.id, {})

    assert result == before
    assert not [s for s in statements if s.lstrip().upper().startswith("UPDATE")]


async def test_patch_with_only_unknown_keys_is_a_noop(db, statements):
    task = await _task(db)
    statements.clear()

    result = await apply_patch(db, TASK_FIELDS, task.id, {"owner": "nadie"})

    assert result["title"] == "Fix bug"
    assert not [s for s in statements if s.lstrip().upper().startswith("UPDATE")]


async def test_missing_id_raises_not_found_without_writing(db, statements):
    with pytest.raises(NotFoundError) as exc_info:
        await apply_patch(db, TASK_FIELDS, "does-not-exist", {"status": "done"})

    assert exc_info.value.entity_id == "does-not-exist"
    assert not [s for s in statements if s.lstrip().upper().startswith("UPDATE")]


async def test_empty_id_is_rejected(db):
    with pytest.raises(ValueError):
        await apply_patch(db, TASK_FIELDS, "", {"status": "done"})


async def test_description_empty_string_is_stored_as_null(db):
    project = await crud.create_project(db, schemas.ProjectCreate(name="Web", description="old text"))

    updated = await apply_patch(db, PROJECT_FIELDS, project.id, {"description": ""})

    assert updated["description"] is None
    assert (await fetch_row(db, PROJECT_FIELDS, project.id))["description"] is None


async def test_exactly_one_update_statement(db, statements):
    project = await crud.create_project(db, schemas.ProjectCreate(name="Web"))
    statements.clear()

    await apply_patch(db, PROJECT_FIELDS, project.id, {"progress": 40, "is_favorite": True})

    updates = [s for s in statements if s.lstrip().upper().startswith("UPDATE")]
    assert len(updates) == 1
    assert _set_columns(updates[0]) == ["progress", "is_favorite", "updated_at"]
