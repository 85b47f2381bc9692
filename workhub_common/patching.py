"""
Actualizaciones parciales (PATCH semántico sobre PUT) a partir de una tabla
declarativa de campos por entidad.

Cada entidad define un `PatchSchema` con la lista blanca de campos
actualizables, en un orden fijo. A partir de un "patch" disperso (solo las
claves que el cliente quiere cambiar) se construye un único
`UPDATE ... SET ... WHERE id = ... RETURNING *` parametrizado:

- una clave ausente deja la columna intacta;
- una clave presente se coerciona según su `FieldKind` (texto vacío a NULL,
  listas a JSON, fechas ISO a `date`/`datetime`);
- las claves que no están en la lista blanca se ignoran;
- `updated_at` siempre se asigna al final;
- si no queda ninguna asignación no se ejecuta ningún UPDATE y se devuelve
  la fila existente.
"""
import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import Table, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .json_fields import encode_json_list

logger = logging.getLogger("workhub-common")

_MISSING = object()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotFoundError(LookupError):
    """La entidad no existe (antes o durante la escritura)."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} con ID {entity_id} no encontrado")


class FieldKind(str, enum.Enum):
    TEXT = "text"
    NULLABLE_TEXT = "nullable_text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    DATE = "date"
    DATETIME = "datetime"
    STRING_LIST = "string_list"  # arreglo nativo de la base de datos
    JSON_LIST = "json_list"      # lista serializada en una columna de texto


@dataclass(frozen=True)
class PatchField:
    name: str
    column: str
    kind: FieldKind = FieldKind.TEXT

    def coerce(self, value: Any) -> Any:
        kind = self.kind

        if kind is FieldKind.NULLABLE_TEXT:
            return None if value == "" else value

        if kind is FieldKind.DATE:
            if value in ("", None):
                return None
            if isinstance(value, str):
                return date.fromisoformat(value)
            return value

        if kind is FieldKind.DATETIME:
            if value in ("", None):
                return None
            if isinstance(value, str):
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            return value

        if kind is FieldKind.JSON_LIST:
            return encode_json_list(value)

        if kind is FieldKind.STRING_LIST and value is not None:
            return list(value)

        # TEXT, NUMBER, BOOLEAN, ENUM: valor literal (incluido None)
        return value


def field(name: str, kind: FieldKind = FieldKind.TEXT, column: Optional[str] = None) -> PatchField:
    """Atajo para declarar un campo; la columna por defecto es el propio nombre."""
    return PatchField(name=name, column=column or name, kind=kind)


class PatchSchema:
    """Lista blanca ordenada de campos actualizables de una tabla."""

    def __init__(
        self,
        table: Table,
        entity: str,
        fields: Sequence[PatchField],
        id_column: str = "id",
        touch_column: str = "updated_at",
    ):
        self.table = table
        self.entity = entity
        self.fields: Tuple[PatchField, ...] = tuple(fields)
        self.id_column = table.c[id_column]
        self.touch_column = table.c[touch_column]
        self._validate()

    def _validate(self) -> None:
        names, columns = set(), set()
        for f in self.fields:
            if f.column not in self.table.c:
                raise ValueError(f"{self.entity}: la columna '{f.column}' no existe en '{self.table.name}'")
            if f.name in names or f.column in columns:
                raise ValueError(f"{self.entity}: campo duplicado '{f.name}'")
            if f.column in (self.id_column.key, self.touch_column.key):
                raise ValueError(f"{self.entity}: '{f.column}' no es actualizable")
            names.add(f.name)
            columns.add(f.column)

    @property
    def columns(self) -> List[str]:
        return [f.column for f in self.fields]

    def assignments(self, patch: Mapping[str, Any]) -> List[Tuple[str, Any]]:
        """
        Traduce el patch a pares `(columna, valor)` en el orden de la tabla
        de campos. Se acepta tanto el nombre externo (p.ej. `firstName`) como
        el de la columna (`first_name`); si vienen ambos gana el externo.
        """
        pairs = []
        for f in self.fields:
            value = patch.get(f.name, _MISSING)
            if value is _MISSING and f.column != f.name:
                value = patch.get(f.column, _MISSING)
            if value is _MISSING:
                continue
            pairs.append((f.column, f.coerce(value)))
        return pairs

    def ignored_keys(self, patch: Mapping[str, Any]) -> List[str]:
        known = {f.name for f in self.fields} | {f.column for f in self.fields}
        return [key for key in patch if key not in known]

    def update_statement(self, entity_id: Any, assignments: Sequence[Tuple[str, Any]], now: Optional[datetime] = None):
        """UPDATE con SET en orden determinista, `updated_at` al final y el id como último parámetro."""
        values = [(self.table.c[column], value) for column, value in assignments]
        values.append((self.touch_column, now or utcnow()))
        return (
            update(self.table)
            .where(self.id_column == entity_id)
            .ordered_values(*values)
            .returning(*self.table.c)
        )

    def select_statement(self, entity_id: Any):
        return select(*self.table.c).where(self.id_column == entity_id)


async def fetch_row(db: AsyncSession, schema: PatchSchema, entity_id: Any) -> Optional[Dict[str, Any]]:
    result = await db.execute(schema.select_statement(entity_id))
    row = result.mappings().first()
    return dict(row) if row is not None else None


async def apply_patch(
    db: AsyncSession,
    schema: PatchSchema,
    entity_id: Any,
    patch: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Aplica un patch disperso sobre la fila `entity_id`.

    Returns:
        Dict: la fila tal como quedó almacenada (o la existente si el patch
        no tenía campos reconocidos).

    Raises:
        NotFoundError: si el id no existe.
        SQLAlchemyError: cualquier error de la base de datos, sin envolver.
    """
    if entity_id in (None, ""):
        raise ValueError(f"{schema.entity}: se requiere un ID")

    existing = await fetch_row(db, schema, entity_id)
    if existing is None:
        raise NotFoundError(schema.entity, entity_id)

    ignored = schema.ignored_keys(patch)
    if ignored:
        logger.debug(f"{schema.entity} {entity_id}: claves ignoradas {ignored}")

    assignments = schema.assignments(patch)
    if not assignments:
        logger.info(f"{schema.entity} {entity_id}: sin campos para actualizar, se devuelve sin cambios")
        return existing

    stmt = schema.update_statement(entity_id, assignments)
    logger.debug(f"{schema.entity} {entity_id}: SET {[column for column, _ in assignments] + [schema.touch_column.key]}")

    result = await db.execute(stmt)
    row = result.mappings().first()
    if row is None:
        # Borrada entre la lectura y la escritura
        await db.rollback()
        raise NotFoundError(schema.entity, entity_id)

    updated = dict(row)
    await db.commit()
    return updated
