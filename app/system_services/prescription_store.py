# app/system_services/prescription_store.py
"""
In-memory prescription store.

Lifecycle: one store per application instance, built from the seed dataset
when the app starts (PrescriptionStore.from_seed) and discarded on shutdown.
Nothing is written back to disk.
"""
import itertools
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pydantic import TypeAdapter

from app.system_models.prescription_model.prescription_schemas import Prescription
from app.system_services.refill_scheduler import refill_date

logger = logging.getLogger(__name__)

_SEED_ADAPTER = TypeAdapter(List[Prescription])


def _rescheduled(record: Prescription) -> Prescription:
    expected = refill_date(record.prescribed_date, record.quantity, record.frequency)
    if record.refill_date == expected:
        return record
    logger.warning(
        f"⚠️  Seed prescription {record.id} refill {record.refill_date:%Y-%m-%d} "
        f"does not match schedule, using {expected:%Y-%m-%d}"
    )
    return record.model_copy(update={"refill_date": expected})


class PrescriptionStore:
    """
    Ordered collection of immutable Prescription records keyed by id.

    Ids come from a counter owned by the store, so they are unique and
    monotonically increasing even when creates interleave. Ids of deleted
    records are never handed out again.
    """

    def __init__(self, records: Iterable[Prescription] = ()):
        self._records: Dict[int, Prescription] = {}
        for record in records:
            self.add(record)
        self._ids = itertools.count(max(self._records, default=0) + 1)

    @classmethod
    def from_seed(cls, path: Union[str, Path]) -> "PrescriptionStore":
        """
        Load the seed JSON file (camelCase records) into a new store.
        Refill dates are re-derived from each record's prescribed date,
        quantity and frequency; a stored refillDate is never trusted.
        """
        path = Path(path)
        records = [_rescheduled(r) for r in _SEED_ADAPTER.validate_json(path.read_bytes())]
        store = cls(records)
        logger.info(f"✅ Loaded {len(store)} prescriptions from {path}")
        return store

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, prescription_id: int) -> bool:
        return prescription_id in self._records

    def next_id(self) -> int:
        return next(self._ids)

    def add(self, record: Prescription) -> Prescription:
        if record.id in self._records:
            raise ValueError(f"Duplicate prescription id {record.id}")
        self._records[record.id] = record
        return record

    def get(self, prescription_id: int) -> Optional[Prescription]:
        return self._records.get(prescription_id)

    def all(self) -> List[Prescription]:
        return list(self._records.values())

    def by_patient(self, patient_id: int) -> List[Prescription]:
        return [r for r in self._records.values() if r.patient_id == patient_id]

    def replace(self, record: Prescription) -> Optional[Prescription]:
        """Swap in a new version of an existing record, keeping its position."""
        if record.id not in self._records:
            return None
        self._records[record.id] = record
        return record

    def remove(self, prescription_id: int) -> bool:
        return self._records.pop(prescription_id, None) is not None
