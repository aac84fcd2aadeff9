# app/system_services/due_soon.py
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from app.helpers.time import utcnow
from app.system_models.prescription_model.prescription_schemas import Prescription

logger = logging.getLogger(__name__)

DUE_SOON_WINDOW_DAYS = 7

_DATETIME_ADAPTER = TypeAdapter(datetime)


def _as_utc(value) -> Optional[datetime]:
    """Coerce a datetime, date or ISO string to an aware datetime, or None."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    else:
        try:
            moment = _DATETIME_ADAPTER.validate_python(value)
        except ValidationError:
            return None
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


def is_due_soon(refill_date, now=None, window_days: int = DUE_SOON_WINDOW_DAYS) -> bool:
    """
    True when refill_date falls within [now, now + window_days], bounds included.
    Anything that can't be read as a date gives False.
    """
    refill_at = _as_utc(refill_date)
    if refill_at is None:
        logger.debug(f"Unreadable refill date {refill_date!r}")
        return False

    current = utcnow() if now is None else _as_utc(now)
    if current is None:
        return False

    try:
        window_end = current + timedelta(days=window_days)
    except OverflowError:
        window_end = datetime.max.replace(tzinfo=timezone.utc)

    return current <= refill_at <= window_end


def due_soon(
    records: Iterable[Prescription],
    now=None,
    window_days: int = DUE_SOON_WINDOW_DAYS,
) -> List[Prescription]:
    """Prescriptions whose refill falls inside the due-soon window."""
    current = utcnow() if now is None else now
    return [r for r in records if is_due_soon(r.refill_date, current, window_days)]
