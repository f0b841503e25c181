"""Runtime settings, read from ``RIMS_*`` environment variables or ``.env``."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    # Directory holding the JSON collection files.
    data_dir: Path = Field(default=_PROJECT_ROOT / "data")

    # Reservations larger than the on-hand quantity are tolerated unless
    # this is switched off; available quantity still clamps at zero.
    allow_over_reservation: bool = True

    # Expiry applied to restocked batches that arrive without one.
    default_batch_shelf_life_days: int = Field(default=365, ge=1)

    log_level: str = "INFO"
    log_file: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="RIMS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Build settings fresh so environment changes are always honoured."""
    return Settings()
