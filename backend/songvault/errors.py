"""Catalog error kinds shared by the services and the HTTP layer."""
from typing import Optional


class CatalogError(Exception):
    """Base class for catalog failures.

    ``kind`` is a stable machine-readable tag; the message is for humans.
    """

    kind = "catalog_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "detail": self.detail}


class InvalidInputError(CatalogError):
    """Required field missing or empty."""
    kind = "invalid_input"


class NotFoundError(CatalogError):
    """Referenced song or file does not exist."""
    kind = "not_found"


class PersistenceError(CatalogError):
    """Commit to the store failed; nothing from the operation was persisted."""
    kind = "persistence_failure"


class SourceUnreadableError(CatalogError):
    """Metadata could not be extracted from an existing source."""
    kind = "source_unreadable"


class ConflictingWriteError(PersistenceError):
    """Commit rejected by a uniqueness constraint.

    Another operation committed the same natural key first.
    """
