"""Check-in flow endpoints used by the mobile client."""
from fastapi import APIRouter, File, UploadFile

from app.models.checkin import CheckInOpened, CheckInSession, LocationReport, SubmitRequest
from app.services import checkin
from app.services.attendance import serialize_record

router = APIRouter()


def serialize_session(session: CheckInSession) -> dict:
    return {
        "id": str(session.id),
        "status": session.status.value,
        "datetime": session.datetime_label,
        "date": session.date_label,
        "time": session.time_label,
        "photo_verified": session.photo_verified,
        "photo_url": session.photo_url,
        "latitude": session.latitude,
        "longitude": session.longitude,
        "address": session.address,
        "record_id": session.record_id,
    }


@router.post("/", response_model=CheckInOpened, status_code=201)
async def open_checkin():
    """Open a check-in; the status shown here is the one that will be stored."""
    session = await checkin.open_session()
    return CheckInOpened(
        id=str(session.id),
        status=session.status,
        datetime=session.datetime_label,
        date=session.date_label,
        time=session.time_label,
    )


@router.get("/{session_id}")
async def get_checkin(session_id: str):
    session = await checkin.get_session(session_id)
    return serialize_session(session)


@router.post("/{session_id}/photo")
async def upload_photo(session_id: str, file: UploadFile = File(...)):
    """Verify a face is present in the captured selfie."""
    session = await checkin.get_session(session_id)
    image = await file.read()
    session = await checkin.attach_photo(
        session, image, filename=file.filename, content_type=file.content_type
    )
    return {"faces": session.faces_detected, "photo_verified": session.photo_verified}


@router.post("/{session_id}/location")
async def report_location(session_id: str, report: LocationReport):
    session = await checkin.get_session(session_id)
    session = await checkin.attach_location(session, report)
    return {
        "address": session.address,
        "latitude": session.latitude,
        "longitude": session.longitude,
    }


@router.post("/{session_id}/submit", status_code=201)
async def submit_checkin(session_id: str, data: SubmitRequest):
    session = await checkin.get_session(session_id)
    record = await checkin.submit(session, data.name)
    return {
        "message": checkin.SUBMITTED_MESSAGE,
        "record": serialize_record(record).model_dump(mode="json"),
    }
