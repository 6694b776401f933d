"""Attendance history: list, live stream, edit, delete, export."""
import json
from datetime import date
from typing import List, Literal

from fastapi import APIRouter
from fastapi.responses import Response, StreamingResponse

from app.models.attendance import AttendanceOut, AttendanceUpdate
from app.services.attendance import (
    delete_record,
    export_records,
    get_record,
    list_records,
    serialize_record,
    update_record,
    watch_records,
)

router = APIRouter()


@router.get("/", response_model=List[AttendanceOut])
async def list_attendance():
    records = await list_records()
    return [serialize_record(r) for r in records]


@router.get("/stream")
async def stream_attendance():
    """Server-sent events: the full history now and again after every change."""

    async def events():
        async for snapshot in watch_records():
            yield f"data: {json.dumps(snapshot)}\n\n"

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/report")
async def download_attendance_report(
    format: Literal["csv", "excel"] = "csv",
):
    """Download the attendance history as CSV or Excel."""
    records = await list_records()
    body, media_type, ext = export_records(records, format)
    return Response(
        content=body,
        media_type=media_type,
        headers={
            "Content-Disposition": f"attachment; filename=attendance_{date.today().isoformat()}.{ext}"
        },
    )


@router.get("/{record_id}", response_model=AttendanceOut)
async def get_attendance(record_id: str):
    return serialize_record(await get_record(record_id))


@router.patch("/{record_id}", response_model=AttendanceOut)
async def update_attendance(record_id: str, data: AttendanceUpdate):
    record = await update_record(record_id, data)
    return serialize_record(record)


@router.delete("/{record_id}", status_code=204)
async def delete_attendance(record_id: str):
    await delete_record(record_id)
    return None
