"""
Upload Storage
Saves multipart uploads to the local upload directory and removes them again
"""

import asyncio
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from fastapi import UploadFile

from sportnet.config import settings
from sportnet.exceptions import BadRequestError, PayloadTooLargeError, UploadTimeoutError

logger = logging.getLogger(__name__)

MIME_SUFFIXES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
}


async def save_upload(upload: UploadFile, subdir: str) -> Dict:
    """
    Validate and write one uploaded file

    Returns:
        File reference {"path", "original_name", "mime_type", "size"}

    Raises:
        BadRequestError: disallowed content type
        PayloadTooLargeError: file exceeds MAX_UPLOAD_SIZE
    """
    if upload.content_type not in settings.allowed_upload_types_list:
        raise BadRequestError(f"Unsupported file type: {upload.content_type}. Only JPEG and PNG are allowed")

    content = await upload.read(settings.MAX_UPLOAD_SIZE + 1)
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise PayloadTooLargeError(f"File '{upload.filename}' exceeds {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB")

    directory = Path(settings.UPLOAD_DIR) / subdir
    directory.mkdir(parents=True, exist_ok=True)

    suffix = MIME_SUFFIXES.get(upload.content_type, Path(upload.filename or "").suffix.lower())
    path = directory / f"{uuid4().hex}{suffix}"
    path.write_bytes(content)

    return {
        "path": str(path),
        "original_name": upload.filename or path.name,
        "mime_type": upload.content_type,
        "size": len(content),
    }


async def save_uploads(uploads: List[UploadFile], subdir: str, timeout: Optional[float] = None) -> List[Dict]:
    """
    Save every upload in order, bounded by a timeout

    Files written before a failure are removed again.

    Raises:
        UploadTimeoutError: saving took longer than UPLOAD_TIMEOUT_SECONDS
    """
    if len(uploads) > settings.MAX_UPLOAD_FILES:
        raise BadRequestError(f"Too many files, at most {settings.MAX_UPLOAD_FILES} are allowed")

    saved: List[Dict] = []

    async def _save_all():
        for upload in uploads:
            saved.append(await save_upload(upload, subdir))

    try:
        await asyncio.wait_for(_save_all(), timeout=timeout or settings.UPLOAD_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.warning(f"Upload to '{subdir}' timed out after {len(saved)} of {len(uploads)} files")
        remove_files(saved)
        raise UploadTimeoutError()
    except Exception:
        remove_files(saved)
        raise

    return saved


def remove_files(files: Iterable[Dict]) -> None:
    """Unlink stored files; missing files are only logged"""
    for meta in files:
        path = Path(meta["path"])
        try:
            path.unlink()
            logger.info(f"Removed file {path}")
        except FileNotFoundError:
            logger.warning(f"File already gone: {path}")
        except OSError as e:
            logger.error(f"Failed to remove file {path}: {str(e)}")
