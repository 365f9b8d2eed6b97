"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SALON_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Salon Finder API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    geocoding_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL of the Nominatim-compatible geocoding service.",
    )
    geocoding_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocoding_user_agent: str = Field(default="salon-finder/1.0")

    timezone: str = Field(
        default="Europe/Berlin",
        description="IANA zone used to anchor relative time frames (today, this week).",
    )
    default_radius_km: int = Field(default=5, ge=1)
    min_radius_km: int = Field(default=1, ge=1)
    max_radius_km: int = Field(default=20, ge=1)
    cluster_cell_size_degrees: float = Field(
        default=0.01,
        gt=0.0,
        description="Grid cell edge in degrees used to group salon markers.",
    )

    tax_rate_percent: float = Field(default=19.0, ge=0.0)
    invoice_function_name: str = Field(default="create-invoice")
    default_payment_method: str = Field(default="cash")
    default_appointment_minutes: int = Field(default=30, ge=1)

    query_cache_ttl_seconds: float = Field(default=60.0, ge=0.0)
    query_cache_max_entries: int = Field(default=1024, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @model_validator(mode="after")
    def _check_radius_bounds(self) -> "Settings":
        if self.min_radius_km > self.max_radius_km:
            raise ValueError("min_radius_km must not exceed max_radius_km")
        if not self.min_radius_km <= self.default_radius_km <= self.max_radius_km:
            raise ValueError("default_radius_km must lie within [min_radius_km, max_radius_km]")
        return self


settings = Settings()
