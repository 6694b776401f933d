"""Check-in session: server-side state of one check-in screen."""
from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import BaseModel, ConfigDict, Field

from app.models.attendance import AttendanceStatus


class LocationPermission(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    DENIED_FOREVER = "denied_forever"


class LocationReport(BaseModel):
    """What the device's geolocation capability reported."""
    model_config = ConfigDict(extra="ignore")
    service_enabled: bool = True
    permission: LocationPermission = LocationPermission.GRANTED
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class CheckInSession(Document):
    opened_at: datetime = Field(default_factory=datetime.utcnow)

    # Captured once when the session is opened, never re-evaluated
    date_label: str
    time_label: str
    datetime_label: str
    hour: int
    minute: int
    status: AttendanceStatus

    photo_verified: bool = False
    faces_detected: int = 0
    photo_url: Optional[str] = None
    photo_key: Optional[str] = None

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: str = ""

    record_id: Optional[str] = None  # set once submitted

    class Settings:
        name = "checkin_sessions"
        use_state_management = True

    @property
    def is_located(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class CheckInOpened(BaseModel):
    id: str
    status: AttendanceStatus
    datetime: str
    date: str
    time: str


class SubmitRequest(BaseModel):
    name: str = ""
