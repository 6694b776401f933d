"""Beanie document models and Pydantic schemas."""
from app.models.attendance import AttendanceRecord, AttendanceStatus, AttendanceOut, AttendanceUpdate
from app.models.checkin import CheckInSession, CheckInOpened, LocationPermission, LocationReport, SubmitRequest

__all__ = [
    "AttendanceRecord",
    "AttendanceStatus",
    "AttendanceOut",
    "AttendanceUpdate",
    "CheckInSession",
    "CheckInOpened",
    "LocationPermission",
    "LocationReport",
    "SubmitRequest",
]
