"""Attendance history: listing, live view, edits, deletes and export."""
from __future__ import annotations

import asyncio
import io
import logging
from typing import AsyncIterator

import pandas as pd
from beanie import PydanticObjectId
from pymongo.errors import OperationFailure

from app.config import settings
from app.errors import RecordNotFound
from app.models.attendance import AttendanceOut, AttendanceRecord, AttendanceUpdate

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Name", "Address", "Description", "Datetime", "Latitude", "Longitude", "Timestamp"]


def safe_object_id(value: str | None) -> PydanticObjectId | None:
    if not value:
        return None
    try:
        return PydanticObjectId(value)
    except Exception:
        return None


def serialize_record(record: AttendanceRecord) -> AttendanceOut:
    return AttendanceOut(**{**record.model_dump(), "id": str(record.id)})


async def list_records() -> list[AttendanceRecord]:
    """Every record, in whatever order the store returns them."""
    return await AttendanceRecord.find_all().to_list()


async def get_record(record_id: str) -> AttendanceRecord:
    oid = safe_object_id(record_id)
    record = await AttendanceRecord.get(oid) if oid else None
    if not record:
        raise RecordNotFound()
    return record


async def update_record(record_id: str, data: AttendanceUpdate) -> AttendanceRecord:
    record = await get_record(record_id)
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(record, key, value)
    await record.save()
    logger.info(f"Attendance record {record_id} updated: {sorted(update_data)}")
    return record


async def delete_record(record_id: str) -> None:
    record = await get_record(record_id)
    await record.delete()
    logger.info(f"Attendance record {record_id} deleted")


def snapshot_payload(records: list[AttendanceRecord]) -> list[dict]:
    return [serialize_record(r).model_dump(mode="json") for r in records]


async def poll_records(
    last: list[dict], interval: float | None = None
) -> AsyncIterator[list[dict]]:
    """Re-read the collection on an interval, yielding only changed snapshots."""
    interval = settings.history_poll_seconds if interval is None else interval
    while True:
        await asyncio.sleep(interval)
        current = snapshot_payload(await list_records())
        if current != last:
            last = current
            yield current


async def watch_records() -> AsyncIterator[list[dict]]:
    """Live view of the whole collection: one snapshot now, one per change after.

    Change streams need a replica set; a standalone server falls back to polling.
    """
    snapshot = snapshot_payload(await list_records())
    yield snapshot
    collection = AttendanceRecord.get_motor_collection()
    try:
        async with collection.watch() as stream:
            async for _change in stream:
                snapshot = snapshot_payload(await list_records())
                yield snapshot
        return
    except OperationFailure as e:
        logger.warning(f"Change streams unavailable ({e}); polling every {settings.history_poll_seconds}s")
    async for current in poll_records(snapshot):
        yield current


def records_to_frame(records: list[AttendanceRecord]) -> pd.DataFrame:
    rows = [
        {
            "Name": r.name,
            "Address": r.address,
            "Description": r.description.value,
            "Datetime": r.datetime,
            "Latitude": r.latitude,
            "Longitude": r.longitude,
            "Timestamp": r.timestamp,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_records(records: list[AttendanceRecord], format: str = "csv") -> tuple[bytes, str, str]:
    """Render records as (body, media_type, file extension)."""
    df = records_to_frame(records)
    if format == "csv":
        stream = io.StringIO()
        df.to_csv(stream, index=False)
        return stream.getvalue().encode("utf-8"), "text/csv", "csv"
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Attendance")
    return (
        output.getvalue(),
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "xlsx",
    )
