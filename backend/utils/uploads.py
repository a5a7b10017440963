# backend/utils/uploads.py
import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile

from config import settings
from utils.errors import ValidationFailed, AppError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def check_image_files(files: List[UploadFile]) -> None:
    """Reject the whole batch before anything is written."""
    if len(files) > settings.MAX_PRODUCT_IMAGES:
        raise ValidationFailed(f"At most {settings.MAX_PRODUCT_IMAGES} images per product")
    for f in files:
        if f.content_type not in ALLOWED_IMAGE_TYPES:
            raise ValidationFailed(f"Invalid file type: {f.filename}")


def save_image(file: UploadFile) -> str:
    """Store one upload under a random name and return its public URL."""
    ext = Path(file.filename or "").suffix.lstrip(".") or "bin"
    unique_filename = f"{uuid.uuid4()}.{ext}"
    save_path = upload_dir() / unique_filename
    try:
        with open(save_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except OSError as e:
        logger.error("File save error for %s: %s", file.filename, e)
        raise AppError(f"File save error: {e}")
    finally:
        file.file.close()
    return f"{settings.UPLOAD_URL_PREFIX}/{unique_filename}"


def save_images(files: List[UploadFile]) -> List[str]:
    check_image_files(files)
    urls = []
    try:
        for f in files:
            urls.append(save_image(f))
    except AppError:
        discard_images(urls)
        raise
    return urls


def _local_path(url: Optional[str]) -> Optional[Path]:
    prefix = settings.UPLOAD_URL_PREFIX.rstrip("/") + "/"
    if not url or not url.startswith(prefix):
        return None
    return Path(settings.UPLOAD_DIR) / url[len(prefix):]


def discard_images(urls: List[str]) -> None:
    """Remove stored files for the given URLs; URLs outside the upload dir are skipped."""
    for url in urls:
        path = _local_path(url)
        if path is None or not path.exists():
            continue
        try:
            os.remove(path)
        except OSError as e:
            logger.warning("Could not remove %s: %s", path, e)
