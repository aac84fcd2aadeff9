from datetime import date, datetime, timedelta, timezone

import pytest

from app.system_models.prescription_model.prescription_schemas import Prescription
from app.system_services.due_soon import due_soon, is_due_soon

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def test_three_days_ahead_is_due_soon():
    today = date(2024, 3, 1)
    assert is_due_soon(today + timedelta(days=3), today)


def test_ten_days_ahead_is_not_due_soon():
    today = date(2024, 3, 1)
    assert not is_due_soon(today + timedelta(days=10), today)


def test_window_bounds_are_inclusive():
    assert is_due_soon(NOW, NOW)
    assert is_due_soon(NOW + timedelta(days=7), NOW)
    assert not is_due_soon(NOW + timedelta(days=7, seconds=1), NOW)


def test_past_refill_is_not_due_soon():
    assert not is_due_soon(NOW - timedelta(seconds=1), NOW)


@pytest.mark.parametrize("value", ["not a date", "", None, {"when": "soon"}, "2024-13-45T00:00:00Z"])
def test_unreadable_refill_date_is_never_due(value):
    assert is_due_soon(value, NOW) is False


def test_iso_strings_are_parsed():
    assert is_due_soon("2024-03-04T09:00:00.000Z", NOW)
    assert not is_due_soon("2024-03-20T09:00:00Z", NOW)


def test_naive_values_are_read_as_utc():
    assert is_due_soon(datetime(2024, 3, 5, 9, 0), NOW)
    assert is_due_soon(NOW + timedelta(days=2), datetime(2024, 3, 1, 9, 0))


def test_custom_window():
    assert not is_due_soon(NOW + timedelta(days=3), NOW, window_days=2)
    assert is_due_soon(NOW + timedelta(days=3), NOW, window_days=3)


def test_defaults_to_current_time():
    assert is_due_soon(datetime.now(timezone.utc) + timedelta(days=1))
    assert not is_due_soon(datetime.now(timezone.utc) + timedelta(days=30))


def _record(prescription_id, refill):
    return Prescription(
        Id=prescription_id,
        patientId=1,
        medicationName="Lisinopril",
        dosage="10mg",
        frequency="Once daily",
        quantity=30,
        prescribingDoctor="Dr. Sarah Wilson",
        prescribedDate=refill - timedelta(days=30),
        refillDate=refill,
    )


def test_due_soon_filters_records():
    records = [
        _record(1, NOW + timedelta(days=1)),
        _record(2, NOW + timedelta(days=9)),
        _record(3, NOW - timedelta(days=1)),
        _record(4, NOW + timedelta(days=7)),
    ]
    assert [r.id for r in due_soon(records, NOW)] == [1, 4]


def test_window_end_past_datetime_max_does_not_raise():
    edge = datetime.max.replace(tzinfo=timezone.utc) - timedelta(days=2)
    assert is_due_soon(edge + timedelta(days=1), edge) is True
    assert is_due_soon(edge - timedelta(days=1), edge) is False
