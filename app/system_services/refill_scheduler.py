# app/system_services/refill_scheduler.py
"""
Refill Scheduler
Works out how long a prescription lasts and when it is due for refill.
Higher dosing frequency uses the same quantity up faster; days are
floor-divided so a refill is flagged early rather than late.
"""
from datetime import date, timedelta
from typing import Union

from app.system_models.prescription_model.prescription_schemas import DosingFrequency


def days_supply(quantity: int, frequency: Union[str, DosingFrequency]) -> int:
    """
    Whole days a quantity lasts at the given frequency.

    Unrecognized labels are scheduled as once daily.
    A result of 0 means the refill is due immediately.
    """
    return quantity // DosingFrequency.from_label(frequency).doses_per_day


def refill_date(anchor: date, quantity: int, frequency: Union[str, DosingFrequency]) -> date:
    """
    Advance the anchor by the days of supply.
    Accepts dates and datetimes; a datetime keeps its time of day.
    """
    return anchor + timedelta(days=days_supply(quantity, frequency))
