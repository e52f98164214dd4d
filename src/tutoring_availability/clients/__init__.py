from .auth import AuthenticationError, TokenAuth
from .tutor_client import (
    BackendAuthError,
    BackendConnectionError,
    BackendError,
    BackendNotFoundError,
    BackendRequestError,
    BackendResponseError,
    TutorApiClient,
)

__all__ = [
    "AuthenticationError",
    "BackendAuthError",
    "BackendConnectionError",
    "BackendError",
    "BackendNotFoundError",
    "BackendRequestError",
    "BackendResponseError",
    "TokenAuth",
    "TutorApiClient",
]
