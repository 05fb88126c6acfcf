import logging
import os
import tempfile
from pathlib import Path

from roadbill.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    def __init__(self, base_dir: str) -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def save(self, key: str, data: bytes, content_type: str = "application/json") -> str:
        path = self.base_dir / key
        path.parent.mkdir(parents=True, exist_ok=True)
        # Write beside the target and swap, so readers never see a partial file.
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        resolved = str(path.resolve())
        logger.debug("Saved %s (%d bytes) to %s", key, len(data), resolved)
        return resolved

    def get(self, key: str) -> bytes:
        resolved = (self.base_dir / key).resolve()
        logger.debug("Reading %s from %s", key, resolved)
        return resolved.read_bytes()

    def exists(self, key: str) -> bool:
        return (self.base_dir / key).is_file()

    def get_url(self, key: str) -> str:
        resolved = str((self.base_dir / key).resolve())
        logger.debug("Resolved URL for %s: %s", key, resolved)
        return resolved
