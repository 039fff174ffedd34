"""Upload policy shared by every asset store."""

import re
from datetime import UTC, datetime
from pathlib import PurePosixPath

from inkcraft.domain.errors import MissingRefError, TooLargeError, UnsupportedTypeError
from inkcraft.domain.models import UploadPayload

ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

_UNSAFE_CHARS = re.compile(r"[^\w-]+")


def safe_basename(name: str) -> str:
    """Strip every directory component so a name cannot leave its root."""
    base = name.replace("\\", "/").rsplit("/", 1)[-1].strip()
    if base in {"", ".", ".."}:
        raise MissingRefError()
    return base


def extension_of(name: str) -> str:
    return PurePosixPath(name.replace("\\", "/")).suffix.lower()


def is_allowed_image(name: str) -> bool:
    return extension_of(name) in ALLOWED_EXTENSIONS


def validate_upload(payload: UploadPayload, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Reject a payload with a disallowed extension or an oversized body."""
    if not is_allowed_image(payload.filename):
        raise UnsupportedTypeError(f"Unsupported file type: {payload.filename}")
    if payload.size > max_bytes:
        raise TooLargeError(f"File exceeds {max_bytes} bytes: {payload.filename}")


def build_stored_name(original: str, now: datetime | None = None) -> str:
    """Return a timestamp-prefixed, sanitized file name."""
    moment = now or datetime.now(tz=UTC)
    path = PurePosixPath(safe_basename(original))
    ext = path.suffix.lower()
    base = _UNSAFE_CHARS.sub("-", path.stem) or "image"
    return f"{int(moment.timestamp() * 1000)}-{base}{ext}"
