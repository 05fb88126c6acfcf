from abc import ABC, abstractmethod


class StorageBackend(ABC):
    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "application/json") -> str:
        """Save data under key, replacing any previous value, and return its path/key."""
        ...

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Retrieve data by key. Raises FileNotFoundError when the key is absent."""
        ...

    @abstractmethod
    def exists(self, key: str) -> bool: ...

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Return a presigned URL (S3), absolute file path (local) or the key (memory)."""
        ...
