from .base import (
    AppError,
    BadRequestError,
    ConfigurationError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .http import register_error_handler, render_app_error

__all__ = [
    "AppError",
    "BadRequestError",
    "ConfigurationError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "render_app_error",
    "register_error_handler",
]
