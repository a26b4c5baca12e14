"""
Collection (de)serialization for persisted entities.

Stored blobs are JSON arrays of entity objects. Reading is forgiving:
undecodable text or a non-list payload yields an empty collection, and
individual malformed records are skipped. Absence of data and "no data yet"
are indistinguishable to callers.
"""
import json
import logging
from typing import Any, Iterable, List, Type, TypeVar

from glowhabit.exceptions import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def decode_json(raw: Any, default: Any = None) -> Any:
    """
    Decode a JSON text blob.

    Already-decoded values pass through unchanged. Returns ``default`` for
    missing or malformed input.
    """
    if raw is None:
        return default
    if not isinstance(raw, (str, bytes, bytearray)):
        return raw
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Discarding malformed stored JSON: {e}")
        return default


def encode_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def load_collection(raw: Any, model: Type[T]) -> List[T]:
    """
    Build a list of ``model`` instances from a stored blob.

    Args:
        raw: JSON text or an already-decoded list of dicts
        model: Dataclass exposing ``from_dict``

    Returns:
        Parsed instances, never raising for bad input
    """
    data = decode_json(raw, default=[])
    if not isinstance(data, list):
        logger.warning(f"Expected a list of {model.__name__} records, got {type(data).__name__}")
        return []

    items = []
    for record in data:
        try:
            items.append(model.from_dict(record))
        except (ValidationError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed {model.__name__} record: {e}")
    return items


def dump_collection(items: Iterable[Any]) -> List[dict]:
    return [item.to_dict() for item in items]
