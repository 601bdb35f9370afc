"""Domain errors raised by the repository and filter helpers."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for restaurant catalogue errors."""


class NotFoundError(CatalogError, LookupError):
    """Raised when an operation references a record id that does not exist."""

    def __init__(self, entity: str, record_id: object) -> None:
        super().__init__(f"{entity} not found: {record_id}")
        self.entity = entity
        self.record_id = record_id


class ValidationError(CatalogError, ValueError):
    """Raised when a payload breaks a field rule (empty name, score out of range, ...)."""


class StorageFault(CatalogError):
    """Raised when the local store cannot be read or written.

    Callers should treat this as fatal for the current operation; the store
    itself rolled the transaction back before the error surfaced.
    """
