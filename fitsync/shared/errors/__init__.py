from .base import AppError, DomainError, RecordNotFoundError, ValidationError
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "RecordNotFoundError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
