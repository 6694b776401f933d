import io
from datetime import datetime

import pandas as pd
from pymongo.errors import OperationFailure

from app.config import settings
from app.models.attendance import AttendanceRecord, AttendanceStatus, AttendanceUpdate
from app.services import attendance


def _record(name="Agus", status=AttendanceStatus.ATTEND):
    return AttendanceRecord(
        name=name,
        address="Jalan Merdeka, Gambir, Jakarta, 10110, Indonesia",
        description=status,
        datetime="18 October 2026 | 07:55:00",
        latitude=-6.17,
        longitude=106.82,
        timestamp=datetime(2026, 10, 18, 0, 55),
    )


async def test_update_only_touches_given_fields(db):
    record = _record()
    await record.insert()

    updated = await attendance.update_record(str(record.id), AttendanceUpdate(address="Kantor Cabang"))

    assert updated.address == "Kantor Cabang"
    assert updated.name == "Agus"
    assert updated.timestamp == record.timestamp


async def test_poll_records_yields_on_change(db):
    gen = attendance.poll_records([], interval=0)
    try:
        await _record("Rina").insert()
        snapshot = await anext(gen)
    finally:
        await gen.aclose()

    assert [r["name"] for r in snapshot] == ["Rina"]
    assert snapshot[0]["description"] == "Attend"


async def test_watch_starts_with_current_snapshot(db):
    await _record("Agus").insert()
    gen = attendance.watch_records()
    try:
        first = await anext(gen)
    finally:
        await gen.aclose()

    assert [r["name"] for r in first] == ["Agus"]


async def test_export_excel_roundtrips_through_pandas(db):
    records = [_record("Agus"), _record("Rina", AttendanceStatus.LEAVE)]

    body, media_type, ext = attendance.export_records(records, "excel")

    assert ext == "xlsx"
    assert media_type.endswith("spreadsheetml.sheet")
    df = pd.read_excel(io.BytesIO(body), sheet_name="Attendance")
    assert list(df["Description"]) == ["Attend", "Leave"]


async def test_export_empty_history_has_header_only(db):
    body, media_type, _ = attendance.export_records([], "csv")

    assert media_type == "text/csv"
    assert body.decode().strip() == ",".join(attendance.EXPORT_COLUMNS)


async def test_watch_falls_back_to_polling_without_change_streams(db, monkeypatch):
    real = AttendanceRecord.get_motor_collection()

    class NoChangeStreams:
        def __getattr__(self, name):
            return getattr(real, name)

        def watch(self, *args, **kwargs):
            raise OperationFailure("The $changeStream stage is only supported on replica sets", code=40573)

    monkeypatch.setattr(AttendanceRecord, "get_motor_collection", classmethod(lambda cls: NoChangeStreams()))
    monkeypatch.setattr(settings, "history_poll_seconds", 0)

    gen = attendance.watch_records()
    try:
        assert await anext(gen) == []
        await _record("Rina").insert()
        snapshot = await anext(gen)
    finally:
        await gen.aclose()

    assert [r["name"] for r in snapshot] == ["Rina"]
