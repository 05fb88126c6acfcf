import logging

from roadbill.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class MemoryStorage(StorageBackend):
    """Process-local storage. Contents are lost on restart."""

    def __init__(self) -> None:
        self._objects: dict[str, bytes] = {}

    def save(self, key: str, data: bytes, content_type: str = "application/json") -> str:
        self._objects[key] = bytes(data)
        logger.debug("Stored %s (%d bytes) in memory", key, len(data))
        return key

    def get(self, key: str) -> bytes:
        try:
            return self._objects[key]
        except KeyError:
            raise FileNotFoundError(key) from None

    def exists(self, key: str) -> bool:
        return key in self._objects

    def get_url(self, key: str) -> str:
        return key
