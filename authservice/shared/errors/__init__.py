from .base import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    ErrorKind,
    InternalError,
    NotFoundError,
    ValidationError,
)
from .storage import (
    ConnectionFailure,
    DuplicateEntry,
    EntityNotFound,
    QueryFailure,
    RepositoryError,
)

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "ConnectionFailure",
    "DomainError",
    "DuplicateEntry",
    "EntityNotFound",
    "ErrorKind",
    "InternalError",
    "NotFoundError",
    "QueryFailure",
    "RepositoryError",
    "ValidationError",
]
