"""Face-presence check on an uploaded selfie (OpenCV Haar cascade)."""
import asyncio
import logging
import threading

import cv2
import numpy as np

from app.config import settings
from app.errors import FaceDetectionError, NoFaceDetected

logger = logging.getLogger(__name__)

# one classifier per worker thread; detectMultiScale is not shared across threads
_local = threading.local()


def get_cascade() -> "cv2.CascadeClassifier":
    cascade = getattr(_local, "cascade", None)
    if cascade is None:
        path = settings.face_cascade_path or (cv2.data.haarcascades + "haarcascade_frontalface_default.xml")
        cascade = cv2.CascadeClassifier(path)
        if cascade.empty():
            raise FaceDetectionError(f"Error processing face detection: could not load cascade {path}")
        _local.cascade = cascade
    return cascade


def count_faces(image_bytes: bytes) -> int:
    if not image_bytes:
        raise FaceDetectionError("Error processing face detection: empty image")
    frame = cv2.imdecode(np.frombuffer(image_bytes, dtype=np.uint8), cv2.IMREAD_COLOR)
    if frame is None:
        raise FaceDetectionError("Error processing face detection: image could not be decoded")

    gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    min_size = (settings.face_min_size, settings.face_min_size)
    faces = get_cascade().detectMultiScale(
        gray,
        scaleFactor=settings.face_scale_factor,
        minNeighbors=settings.face_min_neighbors,
        minSize=min_size,
    )
    return len(faces)


async def detect_faces(image_bytes: bytes) -> int:
    """Count faces without blocking the event loop."""
    return await asyncio.to_thread(count_faces, image_bytes)


async def require_face(image_bytes: bytes) -> int:
    faces = await detect_faces(image_bytes)
    logger.info(f"Face check found {faces} face(s)")
    if faces == 0:
        raise NoFaceDetected()
    return faces
