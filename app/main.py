# app/main.py
from dotenv import load_dotenv

load_dotenv()

import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config.appconfig import settings

# Apply logging configuration
logging.config.dictConfig(settings.LOGGING_CONFIG)

# Import routers
from app.system_services.system_routes import router as system_router

# Import services
from app.system_services.prescription_service import PrescriptionService
from app.system_services.prescription_store import PrescriptionStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: state always starts from the seed dataset
    store = PrescriptionStore.from_seed(settings.resolved_seed_path)
    app.state.prescription_service = PrescriptionService(
        store, latency_seconds=settings.simulated_latency_seconds
    )
    print("\n===============================================================================")
    print(f" 🚀 Starting {settings.APP_NAME}")
    print(f" ✅ Seed: {settings.resolved_seed_path} ({len(store)} prescriptions)")
    print(f" ✅ Simulated latency: {settings.SIMULATED_LATENCY_MS} ms")
    print(f" ✅ Refill due-soon window: {settings.REFILL_DUE_SOON_DAYS} days")
    print("===============================================================================\n")
    yield
    # Shutdown
    app.state.prescription_service = None
    print("👋 Shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    description="Prescription lifecycle management with automatic refill scheduling",
    version="1.0.0",
    lifespan=lifespan,
)

# Include routers with prefixes
app.include_router(system_router, prefix="/api/system", tags=["System Services"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
