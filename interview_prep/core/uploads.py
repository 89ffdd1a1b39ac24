"""Profile image storage for uploads served under ``/uploads``."""

from __future__ import annotations

import time
from pathlib import Path

from interview_prep.core.config import settings

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png")


class ImageFileManager:
    """Stores uploaded images on disk and builds their public URLs."""

    def __init__(self, base_dir: str = "uploads"):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def is_allowed(self, content_type: str | None) -> bool:
        return (content_type or "").lower() in ALLOWED_IMAGE_TYPES

    def save(self, original_name: str, data: bytes) -> Path:
        """Write the image as ``<epoch millis>-<sanitized name>``."""
        filename = f"{int(time.time() * 1000)}-{self._sanitize_filename(original_name)}"
        path = self.base_dir / filename
        path.write_bytes(data)
        return path

    def _sanitize_filename(self, filename: str) -> str:
        """Sanitize filename for safe filesystem usage."""

        unsafe_chars = '<>:"/\\|?*'
        for char in unsafe_chars:
            filename = filename.replace(char, "_")

        filename = filename.strip(" .")[-100:]

        filename = filename.replace(" ", "_")

        while "__" in filename:
            filename = filename.replace("__", "_")

        return filename or "image"

    def get_serving_url(self, path: Path, base_url: str = "") -> str:
        return f"{base_url.rstrip('/')}/uploads/{path.name}"


image_store = ImageFileManager(settings.app.upload_dir)
