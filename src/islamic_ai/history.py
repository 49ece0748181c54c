"""Novelty history: persisted ids of duas the user has already seen.

The store is a plain string key-value capability. ``JSONFileStore`` keeps
every key in one JSON file and writes copy-on-write (temp file + rename).
"""

from __future__ import annotations

from contextlib import suppress
import json
import logging
from pathlib import Path
import threading
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from islamic_ai.config import DEFAULT_HISTORY_LIMIT
from islamic_ai.errors import StorageError

if TYPE_CHECKING:
    import os

logger = logging.getLogger(__name__)

HISTORY_KEY = "islamic_ai_dua_history"
STORE_WRITE_FAILED = "Could not save your dua history. Please try again."


@runtime_checkable
class KeyValueStore(Protocol):
    """Persistent string key-value storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*."""
        ...

    def remove(self, key: str) -> None:
        """Delete *key*; a missing key is not an error."""
        ...


class MemoryStore:
    """Dict-backed store; lives as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileStore:
    """Single JSON file mapping key -> string value.

    An unreadable or non-object file reads as empty; the next ``set``
    overwrites it.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        """Initialize the store pointing at a JSON file path."""
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def _read_all(self) -> dict[str, object]:
        """Read and deserialize the entire JSON file into a mapping."""
        if not self._path.exists():
            return {}
        try:
            result = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store file %s: %s", self._path, exc)
            return {}
        return result if isinstance(result, dict) else {}

    def _write_all(self, data: dict[str, object]) -> None:
        """Persist data atomically via temp file rename.

        Raises:
            StorageError: The file or its directory could not be written.
        """
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(
                json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
            )
            tmp.replace(self._path)
        except OSError as exc:
            logger.error("Could not write store file %s: %s", self._path, exc)
            with suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError(
                STORE_WRITE_FAILED,
                hint=f"Check that {self._path} is a writable file path.",
            ) from exc


class NoveltyTracker:
    """Ordered history of delivered dua ids, persisted after every change.

    ``load``/``record`` are serialized so concurrent callers cannot lose
    updates. Duplicates are kept: repeats are the model's failure to
    report, not ours to hide.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = HISTORY_KEY,
        limit: int | None = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        if limit is not None and limit < 1:
            raise ValueError("NoveltyTracker.limit must be >= 1 or None")
        self._store = store
        self._key = key
        self._limit = limit
        self._ids: list[str] = []
        self._lock = threading.Lock()

    @property
    def history(self) -> list[str]:
        """A copy of the in-memory history."""
        with self._lock:
            return list(self._ids)

    def load(self) -> list[str]:
        """Read the persisted history, clearing it if it is corrupt."""
        with self._lock:
            self._ids = self._read()
            return list(self._ids)

    def record(self, dua_id: str) -> list[str]:
        """Append *dua_id*, persist, and return the updated history."""
        with self._lock:
            ids = [*self._ids, dua_id]
            if self._limit is not None and len(ids) > self._limit:
                ids = ids[-self._limit :]
            self._store.set(self._key, json.dumps(ids, ensure_ascii=False))
            self._ids = ids
            return list(ids)

    def clear(self) -> None:
        """Forget every recorded id, in memory and in the store."""
        with self._lock:
            self._store.remove(self._key)
            self._ids = []

    def _read(self) -> list[str]:
        raw = self._store.get(self._key)
        if raw is None:
            return []
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None
        if not isinstance(parsed, list) or not all(isinstance(x, str) for x in parsed):
            logger.warning("Discarding corrupt dua history under %r", self._key)
            self._store.remove(self._key)
            return []
        return parsed
