# dialqr/config.py — Pydantic settings (env vars)

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

QR_ERROR_CORRECTION_LEVELS = ("L", "M", "Q", "H")


class Settings(BaseSettings):
    # Gemini (phone number analysis)
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    gemini_model: str = "gemini-3-flash-preview"
    gemini_timeout_seconds: float = 30.0
    fallback_country_label: str = "Unknown"

    # QR rendering
    qr_size_px: int = 200
    qr_error_correction: str = "H"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("gemini_api_key")
    @classmethod
    def _clean_gemini_api_key(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("qr_error_correction")
    @classmethod
    def _validate_qr_error_correction(cls, value: str) -> str:
        cleaned = value.strip().upper()
        if cleaned not in QR_ERROR_CORRECTION_LEVELS:
            raise ValueError("QR_ERROR_CORRECTION must be one of L, M, Q, H")
        return cleaned

    @field_validator("qr_size_px")
    @classmethod
    def _validate_qr_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("QR_SIZE_PX must be positive")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
