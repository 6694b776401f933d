import datetime
from enum import Enum
from typing import Optional

from beanie import Document
from pydantic import BaseModel, ConfigDict, Field


class AttendanceStatus(str, Enum):
    ATTEND = "Attend"
    LATE = "Late"
    LEAVE = "Leave"


class AttendanceRecord(Document):
    """One check-in event as stored in the ``attendance`` collection."""
    name: str
    address: str
    description: AttendanceStatus
    datetime: str  # "18 October 2026 | 08:30:12"
    latitude: float
    longitude: float
    timestamp: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)

    class Settings:
        name = "attendance"
        use_state_management = True


class AttendanceOut(BaseModel):
    id: str
    name: str
    address: str
    description: AttendanceStatus
    datetime: str
    latitude: float
    longitude: float
    timestamp: datetime.datetime


class AttendanceUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: Optional[str] = None
    address: Optional[str] = None
    description: Optional[AttendanceStatus] = None
    datetime: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
