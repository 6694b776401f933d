"""Attendance check-in service - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import ServerSelectionTimeoutError

from app.api import attendance, checkin
from app.config import settings
from app.db import db_shutdown, db_startup
from app.errors import AttendanceError

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await db_startup()
    except ServerSelectionTimeoutError as e:
        logger.error("MongoDB is not running. Start it with: docker compose up -d")
        raise RuntimeError("MongoDB connection failed. Start MongoDB (e.g. docker compose up -d).") from e
    yield
    await db_shutdown()


app = FastAPI(
    title=settings.app_name,
    description="Selfie check-in with face check, reverse-geocoded location and attendance history",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(errors)},
    )


@app.exception_handler(AttendanceError)
async def attendance_exception_handler(request: Request, exc: AttendanceError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(checkin.router, prefix="/api/checkin", tags=["Check-in"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance History"])


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.app_name}
