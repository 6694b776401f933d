"""Application configuration using Pydantic Settings."""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "Attendance Check-in"
    debug: bool = False
    timezone: str = "UTC"  # clock used for status and datetime labels

    # MongoDB
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "attendance"

    # Reverse geocoding (Nominatim)
    geocoding_url: str = "https://nominatim.openstreetmap.org/reverse"
    geocoding_user_agent: str = "AttendanceCheckin/1.0"
    geocoding_timeout_seconds: float = 6.0
    geocoding_language: str = "en"

    # Face detection (OpenCV Haar cascade)
    face_cascade_path: str = ""  # empty uses the cascade bundled with OpenCV
    face_scale_factor: float = 1.1
    face_min_neighbors: int = 5
    face_min_size: int = 60

    # AWS S3 (optional selfie storage)
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "ap-south-1"
    s3_bucket_selfies: str = ""

    # History live view
    history_poll_seconds: float = 2.0

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:5173"

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {value!r}")
        return value


settings = Settings()
