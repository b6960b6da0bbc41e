"""Listing and removing an owner's stored files."""

import logging

from ..domain import DocumentRecord
from ..domain.exceptions import BlobStoreError, DocumentNotFoundError, MetadataStoreError
from ..ports.blob_store_port import BlobStorePort, blob_key
from ..ports.metadata_store_port import MetadataStorePort

logger = logging.getLogger(__name__)


class FileService:
    """Use cases around already-committed files.

    Metadata is authoritative: a file is removed once its row is gone, even
    if removing the blob fails (the blob is then logged as an orphan).
    """

    def __init__(self, metadata_store: MetadataStorePort, blob_store: BlobStorePort) -> None:
        self.metadata_store = metadata_store
        self.blob_store = blob_store

    def list_files(self, owner_id: str) -> list[DocumentRecord]:
        return self.metadata_store.list_documents(owner_id)

    def delete_file(self, owner_id: str, document_id: str) -> DocumentRecord:
        """Delete one file's row, then its blob.

        Raises:
            DocumentNotFoundError: If the owner has no such document.
            MetadataStoreError: If the row could not be deleted.
        """
        record = self.metadata_store.delete_document(owner_id, document_id)
        if record is None:
            raise DocumentNotFoundError(
                f"Document {document_id} not found",
                context={"owner_id": owner_id, "document_id": document_id},
            )

        if self._blob_still_referenced(owner_id, record.name):
            logger.warning(
                "Keeping blob of %s: another row of owner %s still uses that name",
                record.name,
                owner_id,
            )
        else:
            self._remove_blobs([blob_key(owner_id, record.name)])
        logger.info("Deleted %s (id=%s) for owner %s", record.name, record.id, owner_id)
        return record

    def clear_files(self, owner_id: str) -> int:
        """Delete every file of ``owner_id``; returns how many rows went."""
        removed = self.metadata_store.delete_by_owner(owner_id)
        if removed:
            self._remove_blobs([blob_key(owner_id, record.name) for record in removed])
        logger.info("Cleared %d file(s) for owner %s", len(removed), owner_id)
        return len(removed)

    def _blob_still_referenced(self, owner_id: str, name: str) -> bool:
        """Rows stored before names were unique may share one blob."""
        try:
            return self.metadata_store.has_document_named(owner_id, name)
        except MetadataStoreError as e:
            logger.warning("Could not check other rows named %s, keeping its blob: %s", name, e)
            return True

    def _remove_blobs(self, keys: list[str]) -> None:
        try:
            self.blob_store.delete(keys)
        except BlobStoreError as e:
            logger.warning("Blob removal failed, leaving orphan(s) %s: %s", keys, e)
