import logging
from functools import lru_cache

from roadbill.settings import settings
from roadbill.storage.base import StorageBackend

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_storage() -> StorageBackend:
    """Backend selected once per process; the memory backend relies on this."""
    backend = settings.storage_backend

    if backend == "local":
        from roadbill.storage.local import LocalStorage

        logger.info("Using storage backend: local path=%s", settings.storage_local_path)
        return LocalStorage(settings.storage_local_path)

    if backend == "s3":
        from roadbill.storage.s3 import S3Storage

        logger.info("Using storage backend: s3 bucket=%s", settings.s3_bucket)
        return S3Storage(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            endpoint_url=settings.s3_endpoint_url,
            presigned_expiry=settings.s3_presigned_expiry,
        )

    if backend == "memory":
        from roadbill.storage.memory import MemoryStorage

        logger.info("Using storage backend: memory")
        return MemoryStorage()

    raise ValueError(f"Unsupported storage backend: {backend}")
