"""
PATH: products/services/storage.py

OBJECT STORAGE (S3-compatible) FOR IMAGES

Used by:
- dashboard product create/update (bucket: PRODUCT_IMAGES_BUCKET)
- profile avatar upload (bucket: AVATARS_BUCKET)

Rules:
- Only image/* uploads, capped at MAX_UPLOAD_BYTES.
- Object key: "<epoch-millis>-<sanitized filename>".
- Never overwrite an existing object.
- The returned value is the public URL that gets persisted on the row:
      <PUBLIC_BASE_URL>/<bucket>/<key>
"""

from __future__ import annotations

import logging
import re
import time
from functools import lru_cache
from typing import Iterable

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings

logger = logging.getLogger(__name__)

_MISSING_OBJECT_CODES = {"404", "NoSuchKey", "NotFound"}


class ImageUploadError(Exception):
    """Object storage rejected or failed the upload."""


class InvalidImageError(ImageUploadError):
    """The file itself is not acceptable (type or size)."""


def _config() -> dict:
    return settings.OBJECT_STORAGE


@lru_cache(maxsize=1)
def _s3_client():
    cfg = _config()

    config = None
    if cfg.get("FORCE_PATH_STYLE"):
        config = Config(s3={"addressing_style": "path"})

    return boto3.client(
        "s3",
        endpoint_url=cfg.get("ENDPOINT_URL"),
        region_name=cfg.get("REGION"),
        aws_access_key_id=cfg.get("ACCESS_KEY_ID"),
        aws_secret_access_key=cfg.get("SECRET_ACCESS_KEY"),
        config=config,
    )


def sanitize_filename(file_name: str) -> str:
    name = (file_name or "image").strip()
    name = name.replace("\\", "/").split("/")[-1]
    name = re.sub(r"[^a-zA-Z0-9._-]+", "-", name)
    name = re.sub(r"-{2,}", "-", name).strip("-.")
    return name[:120] or "image"


def make_object_key(file_name: str, *, now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{sanitize_filename(file_name)}"


def public_url(*, bucket: str, key: str) -> str:
    base = _config().get("PUBLIC_BASE_URL") or ""
    if not base:
        raise ImageUploadError("Object storage public URL is not configured")
    return f"{base}/{bucket}/{key}"


def validate_image(file) -> None:
    content_type = (getattr(file, "content_type", "") or "").lower()
    if not content_type.startswith("image/"):
        raise InvalidImageError("Only image files can be uploaded")

    limit = int(_config().get("MAX_UPLOAD_BYTES") or 0)
    size = getattr(file, "size", None)
    if limit and size is not None and size > limit:
        raise InvalidImageError(
            f"Image exceeds the upload limit of {limit // (1024 * 1024)} MB"
        )


def _object_exists(client, *, bucket: str, key: str) -> bool:
    try:
        client.head_object(Bucket=bucket, Key=key)
    except ClientError as exc:
        code = str(exc.response.get("Error", {}).get("Code", ""))
        if code in _MISSING_OBJECT_CODES:
            return False
        raise
    return True


def upload_image(file, *, bucket: str) -> str:
    """
    Upload one image and return its public URL.
    """
    validate_image(file)

    key = make_object_key(getattr(file, "name", ""))
    url = public_url(bucket=bucket, key=key)
    client = _s3_client()

    try:
        if _object_exists(client, bucket=bucket, key=key):
            raise ImageUploadError(f"An image named {key} already exists")

        if hasattr(file, "seek"):
            file.seek(0)

        client.upload_fileobj(
            file,
            bucket,
            key,
            ExtraArgs={
                "ContentType": file.content_type,
                "CacheControl": _config().get("CACHE_CONTROL") or "max-age=3600",
            },
        )
    except (BotoCoreError, ClientError) as exc:
        logger.exception("Image upload failed for %s/%s", bucket, key)
        raise ImageUploadError("Image upload failed, please try again") from exc

    logger.info("Uploaded image %s/%s", bucket, key)
    return url


def upload_images(files: Iterable, *, bucket: str) -> list[str]:
    """
    Upload in order; the first failure propagates and aborts the batch.
    """
    return [upload_image(f, bucket=bucket) for f in files]


def delete_image(url: str, *, bucket: str) -> bool:
    """
    Best-effort removal of an object previously returned by upload_image().
    URLs that do not belong to this bucket are ignored.
    """
    base = _config().get("PUBLIC_BASE_URL") or ""
    prefix = f"{base}/{bucket}/"
    if not base or not (url or "").startswith(prefix):
        return False

    key = url[len(prefix):]
    try:
        _s3_client().delete_object(Bucket=bucket, Key=key)
    except (BotoCoreError, ClientError):
        logger.warning("Could not delete image %s/%s", bucket, key, exc_info=True)
        return False

    logger.info("Deleted image %s/%s", bucket, key)
    return True
