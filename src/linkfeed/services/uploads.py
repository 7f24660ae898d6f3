"""Disk storage for images attached to posts."""
from __future__ import annotations

import logging
import secrets
from pathlib import Path

from linkfeed.core.errors import ValidationError
from linkfeed.core.settings import settings
from linkfeed.db.time import epoch_millis

logger = logging.getLogger(__name__)


def upload_root() -> Path:
    """Return the upload directory, creating it if needed."""
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def _extension(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def generate_filename(original_name: str) -> str:
    """Return ``<epoch-millis>-<random>.<ext>`` for an uploaded file."""
    unique_suffix = f"{epoch_millis()}-{secrets.randbelow(10**9)}"
    return f"{unique_suffix}.{_extension(original_name)}"


def store_image(original_name: str, data: bytes) -> str:
    """Write an uploaded image to disk and return its public URL path.

    Raises:
        ValidationError: Unsupported extension, empty file or file too large.
    """
    ext = _extension(original_name or "")
    allowed = {item.lower().lstrip(".") for item in settings.allowed_image_extensions}
    if ext not in allowed:
        raise ValidationError(
            "Unsupported image type",
            error=f"allowed extensions: {', '.join(sorted(allowed))}",
        )
    if not data:
        raise ValidationError("Uploaded image is empty")
    if len(data) > settings.max_image_bytes:
        raise ValidationError(
            "Uploaded image is too large",
            error=f"limit is {settings.max_image_bytes} bytes",
        )

    filename = generate_filename(original_name)
    (upload_root() / filename).write_bytes(data)
    logger.debug("Stored upload %s (%d bytes)", filename, len(data))
    return f"{settings.upload_url_path.rstrip('/')}/{filename}"


def remove_image(image_url: str | None) -> None:
    """Delete the file behind ``image_url`` if it was stored by :func:`store_image`."""
    if not image_url:
        return
    prefix = settings.upload_url_path.rstrip("/") + "/"
    if not image_url.startswith(prefix):
        return
    name = Path(image_url[len(prefix):]).name
    try:
        (upload_root() / name).unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove upload %s: %s", name, exc)
