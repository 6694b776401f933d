"""AWS S3: optional storage of verified selfies."""
import asyncio
import uuid

import boto3
from botocore.exceptions import ClientError

from app.config import settings

_s3 = None


def get_s3():
    global _s3
    if _s3 is None:
        _s3 = boto3.client(
            "s3",
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id or None,
            aws_secret_access_key=settings.aws_secret_access_key or None,
        )
    return _s3


def selfie_storage_enabled() -> bool:
    return bool(settings.s3_bucket_selfies)


def _put_sync(body: bytes, key: str, content_type: str) -> None:
    get_s3().put_object(
        Bucket=settings.s3_bucket_selfies,
        Key=key,
        Body=body,
        ContentType=content_type or "image/jpeg",
    )


async def upload_selfie_to_s3(body: bytes, filename: str | None, content_type: str | None, *, session_id: str) -> tuple[str, str]:
    """Upload selfie; return (public_url, s3_key)."""
    ext = filename.rsplit(".", 1)[-1] if filename and "." in filename else "jpg"
    key = f"selfies/{session_id}/{uuid.uuid4().hex}.{ext}"
    bucket = settings.s3_bucket_selfies
    await asyncio.to_thread(_put_sync, body, key, content_type or "image/jpeg")
    url = f"https://{bucket}.s3.{settings.aws_region}.amazonaws.com/{key}"
    return url, key


async def delete_from_s3(key: str) -> None:
    """Delete object from S3."""
    try:
        await asyncio.to_thread(get_s3().delete_object, Bucket=settings.s3_bucket_selfies, Key=key)
    except ClientError:
        pass
