from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from roadbill.constants import SIGNATURE_IMAGE, STAMP_IMAGE
from roadbill.errors import StorageError, ValidationError
from roadbill.storage.base import StorageBackend

logger = logging.getLogger(__name__)

IMAGE_NAMES = {"signature": SIGNATURE_IMAGE, "stamp": STAMP_IMAGE}
MAX_IMAGE_SIZE = 5 * 1024 * 1024


def _to_png(data: bytes) -> bytes:
    """Re-encode any Pillow-readable image as PNG."""
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ValidationError("Uploaded file is not a readable image", field="image") from exc

    if img.mode not in ("RGB", "RGBA", "L", "LA"):
        img = img.convert("RGBA")
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class ImageService:
    """Signature and company stamp images, stored under fixed names."""

    def __init__(self, storage: StorageBackend, prefix: str = "images") -> None:
        self.storage = storage
        self.prefix = prefix

    def _key(self, kind: str) -> str:
        try:
            name = IMAGE_NAMES[kind]
        except KeyError:
            raise ValidationError(f"Unknown image kind: {kind}", field="image") from None
        return f"{self.prefix}/{name}" if self.prefix else name

    def upload(self, kind: str, data: bytes) -> str:
        """Store ``data`` as the ``kind`` image, replacing the previous one."""
        key = self._key(kind)
        if not data:
            raise ValidationError("Empty file", field=kind)
        if len(data) > MAX_IMAGE_SIZE:
            raise ValidationError("File too large", field=kind)

        png = _to_png(data)
        try:
            self.storage.save(key, png, content_type="image/png")
        except Exception as exc:
            logger.exception("Failed to store %s image (key=%s)", kind, key)
            raise StorageError(f"Failed to store {key}") from exc
        logger.info("Image uploaded: kind=%s key=%s size=%d", kind, key, len(png))
        return IMAGE_NAMES[kind]

    def check(self) -> dict[str, bool]:
        return {kind: self.storage.exists(self._key(kind)) for kind in IMAGE_NAMES}

    def get(self, kind: str) -> bytes | None:
        """Image bytes, or None when missing or unreadable."""
        key = self._key(kind)
        try:
            return self.storage.get(key)
        except FileNotFoundError:
            return None
        except Exception:
            logger.exception("Failed to read %s image (key=%s), skipping", kind, key)
            return None
