"""In-memory availability backend for offline use and tests."""

from __future__ import annotations

import asyncio
from itertools import count
import logging
from typing import Iterable, List, Optional

from ..core.enums import AvailabilityStatus
from ..schemas.availability import AvailabilityRecord, SlotPayload

logger = logging.getLogger(__name__)


class InMemoryAvailabilityBackend:
    """Holds one tutor's records in memory behind the AvailabilityBackend port."""

    def __init__(self, records: Iterable[AvailabilityRecord] = (), *, tutor_id: int = 1) -> None:
        self.tutor_id = tutor_id
        self._ids = count(1)
        self._records: List[AvailabilityRecord] = [self._with_id(r) for r in records]
        self._load_error: Optional[BaseException] = None
        self._save_error: Optional[BaseException] = None
        self.saved_payloads: List[List[SlotPayload]] = []
        self.load_calls = 0

    def _with_id(self, record: AvailabilityRecord) -> AvailabilityRecord:
        if record.id is not None:
            return record
        return record.model_copy(update={"id": next(self._ids)})

    @property
    def records(self) -> List[AvailabilityRecord]:
        return list(self._records)

    def fail_next_load(self, exc: BaseException) -> None:
        self._load_error = exc

    def fail_next_save(self, exc: BaseException) -> None:
        self._save_error = exc

    def add_booking(self, record: AvailabilityRecord) -> None:
        """Simulate the booking side reserving a range."""
        self._records.append(
            self._with_id(record.model_copy(update={"status": AvailabilityStatus.BOOKED}))
        )

    async def get_my_availability(self) -> List[AvailabilityRecord]:
        await asyncio.sleep(0)
        self.load_calls += 1
        if self._load_error is not None:
            exc, self._load_error = self._load_error, None
            raise exc
        return [r.model_copy() for r in self._records]

    async def update_my_availability(self, slots: List[SlotPayload]) -> None:
        await asyncio.sleep(0)
        if self._save_error is not None:
            exc, self._save_error = self._save_error, None
            raise exc
        kept = [r for r in self._records if r.status != AvailabilityStatus.AVAILABLE]
        created = [
            AvailabilityRecord(
                id=next(self._ids),
                status=AvailabilityStatus.AVAILABLE,
                start_time=slot.start_time,
                end_time=slot.end_time,
            )
            for slot in slots
        ]
        self._records = kept + created
        self.saved_payloads.append(list(slots))
        logger.debug(
            "memory_backend_saved",
            extra={"tutor_id": self.tutor_id, "slots": len(created), "kept": len(kept)},
        )
