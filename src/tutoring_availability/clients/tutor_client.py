"""HTTP client for the tutor availability endpoints."""

from __future__ import annotations

import logging
from typing import Any, List
from uuid import uuid4

import httpx
from pydantic import TypeAdapter, ValidationError

from ..core.config import Settings
from ..core.constants import MY_AVAILABILITY_PATH, TUTOR_AVAILABILITY_PATH
from ..schemas.availability import (
    ApiEnvelope,
    AvailabilityRecord,
    SlotPayload,
    UpdateAvailabilityRequest,
)
from .auth import TokenAuth


class BackendError(Exception):
    """Base error for backend request failures."""


class BackendAuthError(BackendError):
    """Raised when backend rejects authentication."""


class BackendNotFoundError(BackendError):
    """Raised when backend resource is not found."""


class BackendConnectionError(BackendError):
    """Raised when backend connection fails."""


class BackendRequestError(BackendError):
    """Raised for non-auth backend errors."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class BackendResponseError(BackendError):
    """Raised when the backend answers with a payload we cannot parse."""


logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(List[AvailabilityRecord])
_ENVELOPED_RECORDS = TypeAdapter(ApiEnvelope[List[AvailabilityRecord]])


class TutorApiClient:
    """HTTP client for the tutor API; implements the AvailabilityBackend port."""

    def __init__(
        self,
        settings: Settings,
        auth: TokenAuth,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.auth = auth
        self.http = http or httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=httpx.Timeout(
                connect=10.0,
                read=settings.request_timeout_seconds,
                write=10.0,
                pool=10.0,
            ),
        )

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "TutorApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def call(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        request_id = str(uuid4())
        headers = self.auth.get_headers(request_id)
        try:
            response = await self.http.request(
                method,
                path,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.TimeoutException as exc:
            raise BackendConnectionError(f"backend_timeout: Request to {path} timed out") from exc
        except httpx.HTTPError as exc:
            raise BackendConnectionError(f"backend_connection_failed: {exc}") from exc

        if response.status_code in {401, 403}:
            raise BackendAuthError("backend_auth_failed")
        if response.status_code == 404:
            raise BackendNotFoundError("backend_not_found")
        if response.status_code >= 400:
            raise BackendRequestError(
                f"backend_error_{response.status_code}", status_code=response.status_code
            )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BackendResponseError(f"backend_invalid_json: {path}") from exc

    async def get_my_availability(self) -> List[AvailabilityRecord]:
        # This endpoint returns a bare array, not the usual envelope.
        payload = await self.call("GET", MY_AVAILABILITY_PATH)
        try:
            records = _RECORDS.validate_python(payload or [])
        except ValidationError as exc:
            logger.warning("availability_payload_invalid", extra={"path": MY_AVAILABILITY_PATH})
            raise BackendResponseError("availability_payload_invalid") from exc
        logger.debug("availability_fetched", extra={"records": len(records)})
        return records

    async def update_my_availability(self, slots: List[SlotPayload]) -> None:
        body = UpdateAvailabilityRequest(slots=slots).model_dump(mode="json", by_alias=True)
        await self.call("PUT", MY_AVAILABILITY_PATH, json=body)
        logger.info("availability_updated", extra={"slots": len(slots)})

    async def get_tutor_availability(self, tutor_id: int) -> List[AvailabilityRecord]:
        path = TUTOR_AVAILABILITY_PATH.format(tutor_id=int(tutor_id))
        payload = await self.call("GET", path)
        try:
            envelope = _ENVELOPED_RECORDS.validate_python(payload)
        except ValidationError as exc:
            logger.warning("availability_payload_invalid", extra={"path": path})
            raise BackendResponseError("availability_payload_invalid") from exc
        return envelope.data
