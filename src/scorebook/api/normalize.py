import json
import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)

_STRIP_CHARS = "[]'\" "


def _to_int(item: object) -> int | None:
    if isinstance(item, bool):
        return int(item)
    if isinstance(item, int):
        return item
    if isinstance(item, float):
        return int(item) if item.is_integer() else None
    text = str(item).strip().strip("'\"")
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return int(value) if value.is_integer() else None


def _ints(items: Iterable[object]) -> list[int] | None:
    values: list[int] = []
    for item in items:
        value = _to_int(item)
        if value is None:
            return None
        values.append(value)
    return values


def _parse_text(text: str) -> list[int] | None:
    stripped = text.strip()
    if not stripped:
        return []
    try:
        parsed = json.loads(stripped)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return _ints(parsed)
    if isinstance(parsed, (int, float)) and not isinstance(parsed, bool):
        return _ints([parsed])
    # Python-style "['2', '3']" and bare "2,3" both reduce to comma-separated items.
    inner = stripped.strip(_STRIP_CHARS)
    if not inner:
        return []
    return _ints(part for part in inner.split(","))


def parse_int_set(raw: object, allowed: frozenset[int] | None = None) -> frozenset[int]:
    """Normalize an API array field into a set of integers.

    Accepts real lists, JSON-encoded strings, comma-separated strings and
    bracketed quoted lists. Anything unparseable becomes an empty set rather
    than an error, and members outside ``allowed`` are dropped.
    """
    if raw is None or raw == "":
        return frozenset()
    if isinstance(raw, (list, tuple, set, frozenset)):
        values = _ints(raw)
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        values = _ints([raw])
    else:
        values = _parse_text(str(raw))
    if values is None:
        logger.debug("Discarding unparseable array field %r", raw)
        return frozenset()
    result = frozenset(values)
    if allowed is not None:
        result &= allowed
    return result


def parse_optional_int(raw: object) -> int | None:
    if raw is None or isinstance(raw, (list, dict)):
        return None
    return _to_int(raw)


def parse_int(raw: object, default: int = 0) -> int:
    value = parse_optional_int(raw)
    return default if value is None else value
