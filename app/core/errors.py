"""
Error taxonomy for the catalog core.

Every error carries a human readable message, a stable HTTP-style code and a
title naming the area it came from, so the caller can report it without
knowing where it was raised.
"""
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError


class CatalogError(Exception):
    code = 500
    title = "Catalog Error"

    def __init__(self, message: str, code: int = None, title: str = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if title is not None:
            self.title = title

    def to_dict(self) -> dict:
        return {
            "error": self.title,
            "message": self.message,
            "code": self.code
        }


class ValidationError(CatalogError):
    """Caller input problem, detected before any write."""
    code = 406
    title = "Entry Error"


class NotFoundError(CatalogError):
    code = 404
    title = "Not Found"


class ConflictError(CatalogError):
    """Duplicate name or identifier collision."""
    code = 409
    title = "Conflict"


class StorageError(CatalogError):
    code = 500
    title = "Database Error"


class CredentialError(CatalogError):
    code = 500
    title = "API KEY Creation Error"


def map_db_exception(e: Exception, title: str = None) -> CatalogError:
    """Translate a SQLAlchemy exception into the catalog taxonomy"""
    if isinstance(e, CatalogError):
        return e

    if isinstance(e, IntegrityError):
        error_msg = str(e.orig) if hasattr(e, 'orig') else str(e)
        if "unique" in error_msg.lower() or "duplicate key" in error_msg.lower():
            return ConflictError("A record with this key already exists", title=title)
        if "not null" in error_msg.lower():
            return ValidationError("Required fields are missing", title=title)
        return ConflictError("The change conflicts with existing data", title=title)

    if isinstance(e, OperationalError):
        return StorageError("Unable to connect to the database", code=503, title=title)

    if isinstance(e, SQLAlchemyError):
        return StorageError("A database error occurred", title=title)

    return StorageError("An unexpected error occurred", title=title)
