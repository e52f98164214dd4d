"""Persistence port for tutor availability."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ..schemas.availability import AvailabilityRecord, SlotPayload


@runtime_checkable
class AvailabilityBackend(Protocol):
    """Where the signed-in tutor's availability lives.

    ``update_my_availability`` is an overwrite of every AVAILABLE range, never
    a merge. BOOKED records are owned by the booking side and are not written.
    """

    async def get_my_availability(self) -> List[AvailabilityRecord]: ...

    async def update_my_availability(self, slots: List[SlotPayload]) -> None: ...
