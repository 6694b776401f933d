"""Attendance status rule and the check-in clock."""
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from app.config import settings
from app.models.attendance import AttendanceStatus

DATE_FORMAT = "%d %B %Y"
TIME_FORMAT = "%H:%M:%S"


def classify_status(hour: int, minute: int) -> AttendanceStatus:
    """Bucket a time of day into Attend / Late / Leave.

    08:30 is still on time, 08:31 is late. Clauses are checked in order.
    """
    if hour < 8 or (hour == 8 and minute <= 30):
        return AttendanceStatus.ATTEND
    elif (hour > 8 and hour < 18) or (hour == 8 and minute >= 31):
        return AttendanceStatus.LATE
    else:
        return AttendanceStatus.LEAVE


@dataclass(frozen=True)
class CapturedClock:
    date_label: str
    time_label: str
    hour: int
    minute: int
    status: AttendanceStatus

    @property
    def datetime_label(self) -> str:
        return f"{self.date_label} | {self.time_label}"


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.timezone))


def capture_clock(now: datetime) -> CapturedClock:
    """Derive display labels and status from a single clock reading."""
    return CapturedClock(
        date_label=now.strftime(DATE_FORMAT),
        time_label=now.strftime(TIME_FORMAT),
        hour=now.hour,
        minute=now.minute,
        status=classify_status(now.hour, now.minute),
    )
