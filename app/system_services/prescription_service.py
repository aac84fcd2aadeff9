# app/system_services/prescription_service.py
"""
Prescription Service
CRUD facade over the in-memory store. Every call waits at a simulated I/O
boundary, then reads or mutates the store without suspending again.
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Union

from pydantic import TypeAdapter, ValidationError

from app.helpers.time import utcnow
from app.system_models.prescription_model.prescription_schemas import (
    Prescription,
    PrescriptionInput,
)
from app.system_services.prescription_store import PrescriptionStore
from app.system_services.refill_scheduler import refill_date

logger = logging.getLogger(__name__)

_ID_ADAPTER = TypeAdapter(int)
_INPUT_FIELDS = set(PrescriptionInput.model_fields)

PrescriptionData = Union[PrescriptionInput, Mapping[str, Any]]


class PrescriptionNotFound(LookupError):
    """Raised when an operation targets a prescription id that doesn't exist."""

    def __init__(self, prescription_id):
        super().__init__(f"Prescription not found: {prescription_id}")
        self.prescription_id = prescription_id


def _normalize_id(value) -> int:
    try:
        return _ID_ADAPTER.validate_python(value)
    except ValidationError:
        raise PrescriptionNotFound(value) from None


def _normalize_input(data: PrescriptionData) -> PrescriptionInput:
    if isinstance(data, PrescriptionInput):
        return data
    return PrescriptionInput.model_validate(data)


class PrescriptionService:
    def __init__(
        self,
        store: PrescriptionStore,
        latency_seconds: float = 0.0,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.latency_seconds = latency_seconds
        self.clock = clock

    async def _io_boundary(self):
        await asyncio.sleep(self.latency_seconds)

    # ============================================================
    # ✅ READS
    # ============================================================
    async def get_all(self) -> List[Prescription]:
        await self._io_boundary()
        return self.store.all()

    async def get_by_id(self, prescription_id) -> Prescription:
        prescription_id = _normalize_id(prescription_id)
        await self._io_boundary()
        record = self.store.get(prescription_id)
        if record is None:
            logger.warning(f"⚠️  Prescription {prescription_id} not found")
            raise PrescriptionNotFound(prescription_id)
        return record

    async def get_by_patient_id(self, patient_id) -> List[Prescription]:
        await self._io_boundary()
        try:
            patient_id = _ID_ADAPTER.validate_python(patient_id)
        except ValidationError:
            return []
        return self.store.by_patient(patient_id)

    # ============================================================
    # ✅ WRITES
    # ============================================================
    async def create(self, data: PrescriptionData) -> Prescription:
        """
        Store a new prescription prescribed now.
        The refill date is scheduled from the creation time.
        """
        payload = _normalize_input(data)
        await self._io_boundary()

        prescribed_at = self.clock()
        record = Prescription(
            **payload.model_dump(include=_INPUT_FIELDS),
            id=self.store.next_id(),
            prescribed_date=prescribed_at,
            refill_date=refill_date(prescribed_at, payload.quantity, payload.frequency),
        )
        self.store.add(record)
        logger.info(
            f"✅ Created prescription {record.id} ({record.medication_name}) "
            f"for patient {record.patient_id}, refill {record.refill_date:%Y-%m-%d}"
        )
        return record

    async def update(self, prescription_id, data: PrescriptionData) -> Prescription:
        """
        Replace every field except id and prescribed_date.

        The refill date is rescheduled from the ORIGINAL prescribed date with
        the new quantity and frequency, not from the time of the update.
        """
        prescription_id = _normalize_id(prescription_id)
        payload = _normalize_input(data)
        await self._io_boundary()

        current = self.store.get(prescription_id)
        if current is None:
            logger.warning(f"⚠️  Cannot update prescription {prescription_id}: not found")
            raise PrescriptionNotFound(prescription_id)

        record = Prescription(
            **payload.model_dump(include=_INPUT_FIELDS),
            id=current.id,
            prescribed_date=current.prescribed_date,
            refill_date=refill_date(current.prescribed_date, payload.quantity, payload.frequency),
        )
        self.store.replace(record)
        logger.info(f"✅ Updated prescription {record.id}, refill {record.refill_date:%Y-%m-%d}")
        return record

    async def delete(self, prescription_id) -> Dict[str, bool]:
        prescription_id = _normalize_id(prescription_id)
        await self._io_boundary()

        if not self.store.remove(prescription_id):
            logger.warning(f"⚠️  Cannot delete prescription {prescription_id}: not found")
            raise PrescriptionNotFound(prescription_id)

        logger.info(f"🗑️  Deleted prescription {prescription_id}")
        return {"success": True}
