"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by the chat, authentication and moderation
apps. No chat rules live here.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - NotFoundError: Raised by lookups shared across views

HTTP glue:
    - core.responses.failure_response: ServiceResult failure -> Response
    - core.exception_handler.api_exception_handler: DRF exception handler
    - core.authentication.CookieSessionAuthentication: 401-aware sessions

Note:
    Models are NOT imported here to avoid AppRegistryNotReady errors.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

# Exceptions (no Django dependencies)
from .exceptions import BaseApplicationError, NotFoundError

__all__ = [
    # Services
    "BaseService",
    "ServiceResult",
    # Exceptions
    "BaseApplicationError",
    "NotFoundError",
]
