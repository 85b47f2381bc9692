"""
Codec para columnas de texto que guardan listas serializadas en JSON.

Se usa en los campos `phone_numbers`, `additional_links`, `tags` y
`reminders`: al escribir se serializa la lista, al leer se normaliza de
vuelta a lista sin lanzar excepciones si el valor almacenado está corrupto.
"""
import json
from typing import Any, Iterable, List, Optional


def encode_json_list(values: Optional[Iterable[Any]]) -> str:
    """Serializa una lista a texto JSON. `None` o vacío produce `"[]"`."""
    if not values:
        return "[]"
    return json.dumps(list(values))


def parse_json_list(value: Any, default: Optional[List[Any]] = None) -> List[Any]:
    """
    Normaliza un valor almacenado a lista.

    - Una lista se devuelve tal cual.
    - Un texto con un arreglo JSON se parsea.
    - Cualquier otra cosa (None, JSON inválido, JSON que no es arreglo)
      devuelve `default` (lista vacía si no se indica).
    """
    if default is None:
        default = []

    if isinstance(value, list):
        return value
    if not value:
        return default

    if isinstance(value, (str, bytes, bytearray)):
        try:
            parsed = json.loads(value)
        except ValueError:
            return default
        return parsed if isinstance(parsed, list) else default

    return default
