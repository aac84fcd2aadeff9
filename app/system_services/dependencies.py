# app/system_services/dependencies.py
from fastapi import HTTPException, Request, status

from app.system_services.prescription_service import PrescriptionService


# ===========================================
# ✅ Get the Prescription Service for this app
# ===========================================
def get_prescription_service(request: Request) -> PrescriptionService:
    service = getattr(request.app.state, "prescription_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Prescription service is not initialised"
        )
    return service
