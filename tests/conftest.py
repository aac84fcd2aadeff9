import os

os.environ["SIMULATED_LATENCY_MS"] = "0"

from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.system_services.dependencies import get_prescription_service
from app.system_services.prescription_service import PrescriptionService
from app.system_services.prescription_store import PrescriptionStore

SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "prescriptions.json"

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seeded_store():
    return PrescriptionStore.from_seed(SEED_PATH)


@pytest.fixture
def empty_store():
    return PrescriptionStore()


@pytest.fixture
def service(seeded_store):
    return PrescriptionService(seeded_store, clock=lambda: FIXED_NOW)


@pytest.fixture
def empty_service(empty_store):
    return PrescriptionService(empty_store, clock=lambda: FIXED_NOW)


@pytest.fixture
def new_prescription():
    return {
        "patientId": 7,
        "medicationName": "Amlodipine",
        "dosage": "5mg",
        "frequency": "Twice daily",
        "quantity": 30,
        "prescribingDoctor": "Dr. Sarah Wilson",
        "notes": "Take with water.",
    }


@pytest.fixture
def client(seeded_store):
    # Real clock so due-soon flags are relative to today
    api_service = PrescriptionService(seeded_store)
    app.dependency_overrides[get_prescription_service] = lambda: api_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fixed_now():
    return FIXED_NOW
