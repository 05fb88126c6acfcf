from unittest.mock import MagicMock

import pytest

from roadbill.errors import StorageError, ValidationError
from roadbill.services.image_service import MAX_IMAGE_SIZE, ImageService
from roadbill.storage.memory import MemoryStorage


class TestImageService:
    def setup_method(self):
        self.storage = MemoryStorage()
        self.service = ImageService(self.storage)

    def test_upload_signature(self, png_bytes):
        assert self.service.upload("signature", png_bytes) == "signature.png"
        assert self.storage.exists("images/signature.png")

    def test_upload_stamp_name(self, png_bytes):
        assert self.service.upload("stamp", png_bytes) == "company-stamp.png"
        assert self.storage.exists("images/company-stamp.png")

    def test_upload_overwrites(self, png_bytes):
        self.service.upload("stamp", png_bytes)
        first = self.storage.get("images/company-stamp.png")
        self.service.upload("stamp", png_bytes)
        assert self.storage.get("images/company-stamp.png") == first

    def test_non_png_is_converted(self):
        from io import BytesIO

        from PIL import Image

        buf = BytesIO()
        Image.new("RGB", (10, 10), "white").save(buf, format="JPEG")
        self.service.upload("signature", buf.getvalue())
        assert self.storage.get("images/signature.png").startswith(b"\x89PNG")

    def test_unreadable_image_rejected(self):
        with pytest.raises(ValidationError, match="not a readable image"):
            self.service.upload("signature", b"definitely not an image")

    def test_empty_rejected(self):
        with pytest.raises(ValidationError):
            self.service.upload("signature", b"")

    def test_too_large_rejected(self):
        with pytest.raises(ValidationError, match="too large"):
            self.service.upload("signature", b"x" * (MAX_IMAGE_SIZE + 1))

    def test_unknown_kind_rejected(self, png_bytes):
        with pytest.raises(ValidationError):
            self.service.upload("logo", png_bytes)

    def test_check(self, png_bytes):
        assert self.service.check() == {"signature": False, "stamp": False}
        self.service.upload("stamp", png_bytes)
        assert self.service.check() == {"signature": False, "stamp": True}

    def test_get_missing_is_none(self):
        assert self.service.get("signature") is None

    def test_get_returns_bytes(self, png_bytes):
        self.service.upload("signature", png_bytes)
        assert self.service.get("signature").startswith(b"\x89PNG")

    def test_get_failure_is_none(self):
        storage = MagicMock()
        storage.get.side_effect = RuntimeError("boom")
        assert ImageService(storage).get("stamp") is None

    def test_save_failure_raises_storage_error(self, png_bytes):
        storage = MagicMock()
        storage.save.side_effect = OSError("read-only")
        with pytest.raises(StorageError):
            ImageService(storage).upload("stamp", png_bytes)

    def test_without_prefix(self, png_bytes):
        service = ImageService(self.storage, prefix="")
        service.upload("signature", png_bytes)
        assert self.storage.exists("signature.png")
