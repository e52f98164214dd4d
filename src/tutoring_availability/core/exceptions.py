# src/tutoring_availability/core/exceptions.py
"""
Domain-specific exceptions for the availability grid.

These exceptions carry a stable ``code`` and a ``details`` mapping so the
presentation layer can surface them without parsing messages.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class ValidationException(DomainException):
    """Raised when business validation fails."""


class ConflictException(DomainException):
    """Raised when an operation conflicts with the current state."""


class ServiceException(DomainException):
    """Raised when a service operation fails."""


# Specific business exceptions


class MalformedRangeError(ValidationException):
    """Raised when a time range is empty, inverted, crosses midnight or cannot be parsed."""

    def __init__(self, value: str, reason: str):
        super().__init__(
            message=f"Malformed time range {value!r}: {reason}",
            code="MALFORMED_RANGE",
            details={"range": value, "reason": reason},
        )


class UnknownWeekdayError(ValidationException):
    """Raised when a day name is not one of Monday..Sunday."""

    def __init__(self, day: str):
        super().__init__(
            message=f"Unknown weekday: {day!r}",
            code="UNKNOWN_WEEKDAY",
            details={"day": day},
        )


class AvailabilityLoadError(ServiceException):
    """Raised when stored availability cannot be loaded or is invalid."""

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "Failed to load availability",
            code="AVAILABILITY_LOAD_FAILED",
            details=details or {},
        )


class AvailabilitySaveError(ServiceException):
    """Raised when the availability schedule could not be persisted."""

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "Failed to save availability",
            code="AVAILABILITY_SAVE_FAILED",
            details=details or {},
        )


class EditorStateError(ConflictException):
    """Raised when an editor operation is not allowed in the current state."""

    def __init__(self, operation: str, state: str):
        super().__init__(
            message=f"Cannot {operation} while editor is {state}",
            code="EDITOR_STATE",
            details={"operation": operation, "state": state},
        )
