"""
Uploaded image model for internal use.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def timestamp_prefix(now: Optional[datetime] = None) -> str:
    """
    Build a filesystem-safe UTC timestamp.

    Millisecond ISO-8601 with a trailing 'Z', colons replaced by hyphens,
    e.g. 2024-05-01T12-30-45.123Z.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return stamp.replace(":", "-")


@dataclass(frozen=True)
class UploadedImage:
    """An image persisted to the local upload directory."""

    original_filename: str
    stored_filename: str
    local_path: Path
    content_type: Optional[str] = None

    @classmethod
    def create(
        cls,
        upload_dir: Path,
        original_filename: str,
        content_type: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> "UploadedImage":
        """
        Derive the stored filename and path for a new upload.

        Only the basename of the client-supplied name is kept.
        """
        original = Path(original_filename).name
        stored = f"{timestamp_prefix(now)}-{original}"
        return cls(
            original_filename=original,
            stored_filename=stored,
            local_path=upload_dir / stored,
            content_type=content_type,
        )
