from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from .constants import ACTIVITY_LIMIT, LIBRARY_KEYS, PAYROLL_KEYS, STORE_JSON_PATH
from .errors import StorageFullError
from .logger import AppEvent, ErrorLogger
from .seeds import library_seed, payroll_seed

log = logging.getLogger(__name__)

# Collections whose fail-soft default is an empty list rather than None.
_LIST_COLLECTIONS = {"students", "employees", "departments", "payments", "activity"}


class LocalStorage:
    """A flat string -> string mapping, the shape of a browser's localStorage."""

    def get_item(self, key: str) -> str | None:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> list[str]:
        raise NotImplementedError


class MemoryStorage(LocalStorage):
    def __init__(self, quota_bytes: int | None = None):
        self._items: dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def _size_with(self, key: str, value: str) -> int:
        size = len(key) + len(value)
        for k, v in self._items.items():
            if k != key:
                size += len(k) + len(v)
        return size

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None and self._size_with(key, value) > self.quota_bytes:
            raise StorageFullError(f"quota of {self.quota_bytes} bytes exceeded writing {key!r}")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileStorage(LocalStorage):
    """Persists every item into one JSON file, rewritten on each change."""

    def __init__(self, path: Path = STORE_JSON_PATH):
        self.path = path
        self._items: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._items is not None:
            return self._items
        if not self.path.exists():
            self._items = {}
            return self._items
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        self._items = {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}
        return self._items

    def _save(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(items, f, indent=2)
            f.write("\n")
        self._items = items

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = dict(self._load())
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = dict(self._load())
        if items.pop(key, None) is not None:
            self._save(items)

    def keys(self) -> list[str]:
        return list(self._load())


class Store:
    """Namespaced JSON facade over a LocalStorage backend.

    `keys` maps logical collection names ("students", "timings", ...) to the
    namespaced storage keys. Reads and writes never raise: failures are logged
    and surfaced as a default value or False.
    """

    def __init__(
        self,
        backend: LocalStorage,
        keys: dict[str, str],
        primary: str,
        seed: Callable[[], dict[str, Any]] | None = None,
        err_logger: ErrorLogger | None = None,
    ):
        if primary not in keys:
            raise KeyError(primary)
        self.backend = backend
        self.keys = dict(keys)
        self.primary = primary
        self.seed = seed
        self.err_logger = err_logger or ErrorLogger()

    def _key(self, name: str) -> str:
        return self.keys[name]

    @staticmethod
    def _empty(name: str) -> Any:
        return [] if name in _LIST_COLLECTIONS else None

    def has(self, name: str) -> bool:
        try:
            return self.backend.get_item(self._key(name)) is not None
        except Exception as e:
            self.err_logger.log_exception(e, f"store.has: {name}")
            return False

    def get(self, name: str, default: Any = None) -> Any:
        fallback = self._empty(name) if default is None else default
        try:
            raw = self.backend.get_item(self._key(name))
            if raw is None:
                return fallback
            return json.loads(raw)
        except Exception as e:
            self.err_logger.log_exception(e, f"store.get: {name}")
            return fallback

    def set(self, name: str, value: Any) -> bool:
        try:
            self.backend.set_item(self._key(name), json.dumps(value))
            return True
        except Exception as e:
            self.err_logger.log_exception(e, f"store.set: {name}")
            return False

    def remove(self, name: str) -> bool:
        try:
            self.backend.remove_item(self._key(name))
            return True
        except Exception as e:
            self.err_logger.log_exception(e, f"store.remove: {name}")
            return False

    def initialize(self) -> bool:
        """Seed sample data when the primary collection is absent."""
        if self.has(self.primary) or self.seed is None:
            return False
        ok = True
        for name, value in self.seed().items():
            ok = self.set(name, value) and ok
        log.info("Store initialized with sample %s data", self.primary)
        return ok

    def clear(self) -> bool:
        ok = True
        for name in self.keys:
            ok = self.remove(name) and ok
        return ok

    def snapshot(self, names: Iterable[str]) -> dict[str, str | None]:
        """Raw serialized values, used to restore collections after a failed write."""
        return {name: self.backend.get_item(self._key(name)) for name in names}

    def restore(self, snap: dict[str, str | None]) -> None:
        for name, raw in snap.items():
            try:
                if raw is None:
                    self.backend.remove_item(self._key(name))
                else:
                    self.backend.set_item(self._key(name), raw)
            except Exception as e:
                self.err_logger.log_exception(e, f"store.restore: {name}")

    # ---------------- Activity ----------------
    def add_event(self, event: AppEvent) -> bool:
        if "activity" not in self.keys:
            return False
        events = self.get("activity")
        if not isinstance(events, list):
            events = []
        events.append(event.to_dict())
        return self.set("activity", events[-ACTIVITY_LIMIT:])

    def list_events(self, limit: int = ACTIVITY_LIMIT) -> list[AppEvent]:
        if "activity" not in self.keys:
            return []
        rows = self.get("activity")
        if not isinstance(rows, list):
            return []
        return [AppEvent.from_dict(r) for r in rows[-limit:] if isinstance(r, dict)]


def library_store(backend: LocalStorage | None = None, err_logger: ErrorLogger | None = None) -> Store:
    return Store(backend or JsonFileStorage(), LIBRARY_KEYS, "students", library_seed, err_logger)


def payroll_store(backend: LocalStorage | None = None, err_logger: ErrorLogger | None = None) -> Store:
    return Store(backend or JsonFileStorage(), PAYROLL_KEYS, "employees", payroll_seed, err_logger)
