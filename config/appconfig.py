# config/appconfig.py
"""
Application Configuration
Controls logging, the prescription seed dataset and refill scheduling settings
"""
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

# Calculate the project root
BASE_DIR = Path(__file__).resolve().parent.parent


class AppSettings(BaseSettings):
    """Configuration for the clinic prescription service"""

    # ============================================================================
    # APPLICATION
    # ============================================================================
    APP_NAME: str = "Clinic Prescription Service"
    LOG_LEVEL: str = "INFO"

    # ============================================================================
    # PRESCRIPTION STORE
    # ============================================================================
    # Loaded wholesale into memory at startup; state resets on every restart
    PRESCRIPTION_SEED_PATH: str = str(BASE_DIR / "data" / "prescriptions.json")

    # Simulated I/O boundary for every service call (0 disables)
    SIMULATED_LATENCY_MS: int = Field(default=800, ge=0)

    # ============================================================================
    # REFILL SCHEDULING
    # ============================================================================
    REFILL_DUE_SOON_DAYS: int = Field(default=7, ge=0)  # Inclusive lookahead window

    class Config:
        env_file = ".env"
        extra = "ignore"

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================
    @property
    def resolved_seed_path(self) -> Path:
        """Get absolute path to the prescription seed file."""
        path = Path(self.PRESCRIPTION_SEED_PATH)
        return path if path.is_absolute() else BASE_DIR / path

    @property
    def simulated_latency_seconds(self) -> float:
        return self.SIMULATED_LATENCY_MS / 1000

    @property
    def LOGGING_CONFIG(self) -> dict:
        """dictConfig for the whole application."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "app": {"handlers": ["console"], "level": self.LOG_LEVEL, "propagate": False},
                "uvicorn": {"handlers": ["console"], "level": "INFO", "propagate": False},
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
        }


settings = AppSettings()
