from __future__ import annotations


class PersistenceError(OSError):
    """Raised by storage backends when a value cannot be written."""


class StorageFullError(PersistenceError):
    """The backend's quota would be exceeded by a write."""


class ImportShapeError(ValueError):
    """An import document is malformed or lacks a required collection."""
