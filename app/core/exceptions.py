"""
Domain exceptions for the feedback service.

Services raise these; the handler registered in app.main renders them as
JSON responses with the matching HTTP status code.
"""

from typing import Any, Dict, Optional
from fastapi import status


class FeedbackAppError(Exception):
    """Base class for all domain errors"""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class ValidationError(FeedbackAppError):
    """Malformed input; reported back to the submitter, never persisted"""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(FeedbackAppError):
    """Caller lacks rights on the resource"""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Not enough permissions", requires_login: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.requires_login = requires_login
        if requires_login:
            self.status_code = status.HTTP_401_UNAUTHORIZED

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        if self.requires_login:
            return {"WWW-Authenticate": "Bearer"}
        return None


class NotFoundError(FeedbackAppError):
    """Resource does not exist or is not visible to the caller"""

    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(FeedbackAppError):
    """The database failed to read or write; the cause stays in details"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Could not save changes, please try again", **kwargs):
        super().__init__(message, **kwargs)
