"""
Storage primitives for GlowHabit.

The engine never touches storage directly. Callers hand it snapshots read
through these injectable stores, each of which exposes ``get()`` and
``set(value)`` over one JSON-compatible value.
"""
import copy
import json
import logging
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from glowhabit.exceptions import StorageError
from glowhabit.serializers import decode_json, dump_collection, encode_json, load_collection

logger = logging.getLogger(__name__)

T = TypeVar('T')


def generate_id() -> str:
    """Short random identifier for new records."""
    return uuid.uuid4().hex[:13]


# =============================================================================
# STORES
# =============================================================================

class Store(ABC):
    """A single JSON-compatible value that can be read and replaced."""

    @abstractmethod
    def get(self) -> Any:
        """Return the stored value, or None when nothing was written yet."""

    @abstractmethod
    def set(self, value: Any) -> None:
        """Replace the stored value."""


class InMemoryStore(Store):
    """Process-local store; values are copied in and out to avoid aliasing."""

    def __init__(self, initial: Any = None):
        self._value = copy.deepcopy(initial)

    def get(self) -> Any:
        return copy.deepcopy(self._value)

    def set(self, value: Any) -> None:
        self._value = copy.deepcopy(value)


class KeyValueStore:
    """
    String-keyed map of JSON text blobs, the shape of browser localStorage.

    ``store(key)`` hands out a ``Store`` bound to one key.
    """

    def __init__(self, backing: Optional[Dict[str, str]] = None):
        self._data = backing if backing is not None else {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, text: str) -> None:
        self._data[key] = text

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def store(self, key: str) -> "KeyStore":
        return KeyStore(self, key)


class KeyStore(Store):
    def __init__(self, backend: KeyValueStore, key: str):
        self.backend = backend
        self.key = key

    def get(self) -> Any:
        return decode_json(self.backend.get_item(self.key), default=None)

    def set(self, value: Any) -> None:
        self.backend.set_item(self.key, encode_json(value))


class JsonFileStore(Store):
    """Store backed by one JSON file on disk."""

    def __init__(self, path):
        self.path = Path(path)

    def get(self) -> Any:
        try:
            text = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read {self.path}: {e}")
            return None
        return decode_json(text, default=None)

    def set(self, value: Any) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
            tmp_path.write_text(json.dumps(value, ensure_ascii=False, indent=2), encoding='utf-8')
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(str(self.path), str(e))


# =============================================================================
# REPOSITORIES
# =============================================================================

class BaseRepository(Generic[T]):
    """
    Typed list-of-entities view over a store.

    Every read deserializes fresh from the store, so there is no cached state
    to invalidate after writes.
    """

    model: Type[T] = None
    entity_name = 'Entity'

    def __init__(self, store: Store):
        self.store = store

    def all(self) -> List[T]:
        return load_collection(self.store.get(), self.model)

    def save_all(self, items: List[T]) -> None:
        self.store.set(dump_collection(items))
        logger.debug(f"Saved {len(items)} {self.entity_name} records")
