"""Image upload storage on the local filesystem.

Files land in ``<settings.upload_dir>/<folder>/`` and are served by the
``/uploads`` static mount in :mod:`kasupe.main`.
"""

import logging
import re
import time
from pathlib import Path

from fastapi import UploadFile

from kasupe.config import settings
from kasupe.exceptions.custom import UploadRejectedError

logger = logging.getLogger(__name__)

UPLOAD_FOLDERS = ("cars", "blogs", "testimonials")
ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def upload_root() -> Path:
    """Return the upload directory, creating it on first use."""
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def stored_filename(original_name: str | None, content_type: str) -> str:
    """Build ``<slug>-<epoch-ms><ext>``.

    The slug comes from the client's file name; the extension always comes
    from the validated content type, never from the client's suffix.
    """
    path = Path(original_name or "upload")
    ext = ALLOWED_CONTENT_TYPES[content_type]
    slug = re.sub(r"[^a-z0-9_-]+", "-", path.stem.lower()).strip("-") or "upload"
    return f"{slug}-{int(time.time() * 1000)}{ext}"


async def save_image(file: UploadFile, folder: str) -> str:
    """Persist an uploaded image and return its path relative to ``/uploads``.

    Raises:
        UploadRejectedError: unknown folder, non-image content type, empty or
            oversized file.
    """
    if folder not in UPLOAD_FOLDERS:
        raise UploadRejectedError(f"Unknown upload folder '{folder}'", status_code=404)
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise UploadRejectedError("Only JPEG, PNG, WebP or GIF images can be uploaded")

    data = await file.read()
    if not data:
        raise UploadRejectedError("Uploaded file is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise UploadRejectedError("Uploaded file is too large", status_code=413)

    target_dir = upload_root() / folder
    target_dir.mkdir(parents=True, exist_ok=True)
    name = stored_filename(file.filename, file.content_type)
    (target_dir / name).write_bytes(data)

    logger.info("Stored upload %s/%s (%d bytes)", folder, name, len(data))
    return f"{folder}/{name}"
