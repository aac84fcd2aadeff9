# app/system_services/system_routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.helpers.time import utcnow
from app.system_models.prescription_model.prescription_schemas import (
    DosingFrequency,
    FrequencyOption,
    Prescription,
    PrescriptionDeleteResponse,
    PrescriptionRequest,
    PrescriptionResponse,
)
from app.system_services.dependencies import get_prescription_service
from app.system_services.due_soon import due_soon, is_due_soon
from app.system_services.prescription_service import PrescriptionNotFound, PrescriptionService
from config.appconfig import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(record: Prescription, now=None) -> PrescriptionResponse:
    """Attach the due-soon flag the console shows next to each prescription."""
    return PrescriptionResponse(
        **record.model_dump(),
        refill_due_soon=is_due_soon(record.refill_date, now, settings.REFILL_DUE_SOON_DAYS),
    )


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prescription not found")


@router.get("/prescriptions", response_model=List[PrescriptionResponse])
async def list_prescriptions(service: PrescriptionService = Depends(get_prescription_service)):
    """List every prescription."""
    records = await service.get_all()
    now = utcnow()
    return [_to_response(r, now) for r in records]


@router.get("/prescriptions/due_soon", response_model=List[PrescriptionResponse])
async def list_due_soon_prescriptions(service: PrescriptionService = Depends(get_prescription_service)):
    """
    Prescriptions whose refill falls within the next REFILL_DUE_SOON_DAYS days.

    Example: GET /api/system/prescriptions/due_soon
    """
    now = utcnow()
    records = due_soon(await service.get_all(), now, settings.REFILL_DUE_SOON_DAYS)
    return [_to_response(r, now) for r in records]


@router.get("/prescriptions/frequencies", response_model=List[FrequencyOption])
async def list_frequencies():
    """Frequency labels accepted by the prescription form."""
    return [FrequencyOption(label=f.value, doses_per_day=f.doses_per_day) for f in DosingFrequency]


@router.get("/prescriptions/{prescription_id}", response_model=PrescriptionResponse)
async def get_prescription(
    prescription_id: int,
    service: PrescriptionService = Depends(get_prescription_service),
):
    try:
        record = await service.get_by_id(prescription_id)
    except PrescriptionNotFound:
        raise _not_found()
    return _to_response(record)


@router.get("/patients/{patient_id}/prescriptions", response_model=List[PrescriptionResponse])
async def list_patient_prescriptions(
    patient_id: int,
    service: PrescriptionService = Depends(get_prescription_service),
):
    """Prescriptions for one patient (empty list when there are none)."""
    records = await service.get_by_patient_id(patient_id)
    now = utcnow()
    return [_to_response(r, now) for r in records]


@router.post("/prescriptions", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_prescription_endpoint(
    prescription: PrescriptionRequest,
    service: PrescriptionService = Depends(get_prescription_service),
):
    """Create a new prescription. The refill date is calculated automatically."""
    try:
        record = await service.create(prescription)
    except Exception as e:
        logger.exception("❌ Failed to create prescription")
        raise HTTPException(status_code=500, detail=str(e))
    return _to_response(record)


@router.put("/prescriptions/{prescription_id}", response_model=PrescriptionResponse)
async def update_prescription_endpoint(
    prescription_id: int,
    prescription: PrescriptionRequest,
    service: PrescriptionService = Depends(get_prescription_service),
):
    """Update a prescription. The refill date is recalculated from the original prescribed date."""
    try:
        record = await service.update(prescription_id, prescription)
    except PrescriptionNotFound:
        raise _not_found()
    except Exception as e:
        logger.exception(f"❌ Failed to update prescription {prescription_id}")
        raise HTTPException(status_code=500, detail=str(e))
    return _to_response(record)


@router.delete("/prescriptions/{prescription_id}", response_model=PrescriptionDeleteResponse)
async def delete_prescription_endpoint(
    prescription_id: int,
    service: PrescriptionService = Depends(get_prescription_service),
):
    try:
        return await service.delete(prescription_id)
    except PrescriptionNotFound:
        raise _not_found()
