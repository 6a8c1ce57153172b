import io
import os
import time
import uuid

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from groundbook.core.config import settings
from groundbook.core.exceptions import PersistenceError, ValidationError
from groundbook.core.logging_config import get_logger

logger = get_logger()

ALLOWED_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
}


def convert_to_jpeg(contents: bytes) -> bytes:
    try:
        img = Image.open(io.BytesIO(contents)).convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Invalid image file")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=90)
    return buffer.getvalue()


def generate_filename() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.jpg"


def _upload_to_cloudinary(image_bytes: bytes, folder: str) -> str:
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
    )
    try:
        result = cloudinary.uploader.upload(
            image_bytes,
            folder=folder,
            resource_type="image",
            format="jpg",
        )
    except cloudinary.exceptions.Error as e:
        logger.error(f"Cloudinary upload failed: {e}")
        raise PersistenceError("Image upload failed")

    return result["secure_url"]


def _write_local(image_bytes: bytes) -> str:
    filename = generate_filename()
    try:
        os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
        with open(os.path.join(settings.UPLOAD_DIR, filename), "wb") as fh:
            fh.write(image_bytes)
    except OSError as e:
        logger.error(f"Writing upload {filename} failed: {e}")
        raise PersistenceError(str(e))
    return filename


def save_upload(upload_file: UploadFile, folder: str = "grounds") -> str:
    """
    Store an uploaded image and return its reference.

    Images are re-encoded to JPEG. The reference is a filename under
    ``UPLOAD_DIR`` (served at ``/uploads``), or the secure URL when
    Cloudinary is configured.
    """
    content_type = (upload_file.content_type or "").lower()
    if content_type not in ALLOWED_TYPES:
        raise ValidationError(
            f"Unsupported file type {upload_file.content_type}. Allowed: JPEG, PNG, WEBP"
        )

    jpeg_bytes = convert_to_jpeg(upload_file.file.read())

    if settings.cloudinary_enabled:
        return _upload_to_cloudinary(jpeg_bytes, folder)
    return _write_local(jpeg_bytes)


def discard_upload(reference: str):
    """Remove a locally stored upload. Cloudinary references are left alone."""
    if reference.startswith(("http://", "https://")):
        logger.warning(f"Leaving remote upload in place: {reference}")
        return

    try:
        os.remove(os.path.join(settings.UPLOAD_DIR, reference))
    except FileNotFoundError:
        pass
