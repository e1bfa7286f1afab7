"""Application settings for the rendezvous server and tests."""

from __future__ import annotations

from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Typed settings loaded from environment variables or explicit kwargs."""

    secretmatch_app_env: str = "dev"
    secretmatch_app_host: str = "127.0.0.1"
    secretmatch_app_port: int = Field(default=8000, ge=1)

    # Unset means a held request waits until the transport gives up.
    secretmatch_hold_timeout_seconds: float | None = Field(default=None, gt=0)
    secretmatch_room_ttl_seconds: int = Field(default=3600, ge=1)
    secretmatch_sweep_interval_seconds: int = Field(default=60, ge=1)

    secretmatch_log_level: str = "INFO"
    secretmatch_log_file: str | None = None

    @model_validator(mode="after")
    def validate_sweep_interval(self) -> "Settings":
        """Ensure idle rooms are swept at least once per TTL window."""
        if self.secretmatch_sweep_interval_seconds > self.secretmatch_room_ttl_seconds:
            raise ValueError(
                "SECRETMATCH_SWEEP_INTERVAL_SECONDS must not exceed "
                "SECRETMATCH_ROOM_TTL_SECONDS"
            )
        return self


def load_settings() -> Settings:
    """Load settings from process environment."""
    return Settings()
