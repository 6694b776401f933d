"""Check-in sequence: open, photo, location, submit."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from pymongo.errors import PyMongoError

from app.errors import (
    IncompleteSubmission,
    LocationUnavailable,
    SelfieStorageFailed,
    SessionAlreadySubmitted,
    SessionNotFound,
    SubmissionFailed,
)
from app.models.attendance import AttendanceRecord
from app.models.checkin import CheckInSession, LocationReport
from app.services.attendance import safe_object_id
from app.services.faces import require_face
from app.services.location import check_location_access, reverse_geocode
from app.services.s3 import delete_from_s3, selfie_storage_enabled, upload_selfie_to_s3
from app.services.status import capture_clock, local_now

logger = logging.getLogger(__name__)

SUBMITTED_MESSAGE = "Attendance submitted successfully!"


async def open_session(now: Optional[datetime] = None) -> CheckInSession:
    """Start a check-in. Status and datetime are fixed here for the whole session."""
    clock = capture_clock(now or local_now())
    session = CheckInSession(
        date_label=clock.date_label,
        time_label=clock.time_label,
        datetime_label=clock.datetime_label,
        hour=clock.hour,
        minute=clock.minute,
        status=clock.status,
    )
    await session.insert()
    logger.info(f"Check-in session {session.id} opened at {clock.datetime_label} as {clock.status.value}")
    return session


async def get_session(session_id: str) -> CheckInSession:
    oid = safe_object_id(session_id)
    session = await CheckInSession.get(oid) if oid else None
    if not session:
        raise SessionNotFound()
    return session


def _ensure_open(session: CheckInSession) -> None:
    if session.record_id:
        raise SessionAlreadySubmitted()


async def attach_photo(
    session: CheckInSession,
    image: bytes,
    *,
    filename: str | None = None,
    content_type: str | None = None,
) -> CheckInSession:
    """Accept a selfie only if at least one face is in it."""
    _ensure_open(session)
    faces = await require_face(image)

    if selfie_storage_enabled():
        old_key = session.photo_key
        try:
            session.photo_url, session.photo_key = await upload_selfie_to_s3(
                image, filename, content_type, session_id=str(session.id)
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Storing selfie for session {session.id} failed: {e}")
            raise SelfieStorageFailed(f"Failed to store selfie: {e}")
        if old_key:
            await delete_from_s3(old_key)

    session.faces_detected = faces
    session.photo_verified = True
    await session.save()
    return session


async def attach_location(session: CheckInSession, report: LocationReport) -> CheckInSession:
    _ensure_open(session)
    latitude, longitude = check_location_access(report)
    session.latitude = latitude
    session.longitude = longitude
    session.address = await reverse_geocode(latitude, longitude)
    await session.save()
    return session


async def submit(session: CheckInSession, name: str) -> AttendanceRecord:
    """Write one attendance record from a completed session.

    Nothing is written unless photo, name and location are all present.
    """
    _ensure_open(session)
    name = (name or "").strip()
    if not session.photo_verified or not name:
        raise IncompleteSubmission()
    if not session.is_located:
        raise LocationUnavailable()

    record = AttendanceRecord(
        name=name,
        address=session.address,
        description=session.status,
        datetime=session.datetime_label,
        latitude=session.latitude,
        longitude=session.longitude,
    )
    try:
        await record.insert()
    except PyMongoError as e:
        logger.error(f"Storing attendance for session {session.id} failed: {e}")
        raise SubmissionFailed(f"Failed to submit attendance: {e}")

    session.record_id = str(record.id)
    try:
        await session.save()
    except PyMongoError as e:
        # the record is stored either way; only the session marker is lost
        logger.error(f"Attendance {record.id} stored but session {session.id} not marked submitted: {e}")
    logger.info(f"Attendance {record.id} stored for {name!r} as {record.description.value}")
    return record
