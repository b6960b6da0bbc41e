"""Filesystem directory as the blob store."""

import logging
from pathlib import Path

from ....core.domain.exceptions import BlobStoreError
from ....core.ports.blob_store_port import BlobStorePort

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStorePort):
    """Stores each blob at ``root/<owner>/<filename>``."""

    def __init__(self, root: str | Path = "data/blobs") -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise BlobStoreError(f"Blob key escapes storage root: {key}", context={"key": key})
        return path

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise BlobStoreError(f"Failed to write {key}: {e}", cause=e, context={"key": key}) from e
        logger.debug("Wrote %d bytes (%s) to %s", len(data), content_type, path)

    def delete(self, keys: list[str]) -> None:
        failed = []
        for key in keys:
            try:
                self._path(key).unlink(missing_ok=True)
            except (OSError, BlobStoreError) as e:
                logger.debug("Could not remove %s: %s", key, e)
                failed.append(key)
        if failed:
            raise BlobStoreError(
                f"Failed to remove {len(failed)} blob(s)", context={"keys": failed}
            )
