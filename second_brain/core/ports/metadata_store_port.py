"""Metadata Store Port Interface."""

from abc import ABC, abstractmethod

from ..domain import DocumentRecord, NewDocument


class MetadataStorePort(ABC):
    """Abstract interface for the per-owner document metadata table.

    Implementations raise ``MetadataStoreError`` on failure.
    """

    @abstractmethod
    def list_documents(self, owner_id: str, with_embedding: bool = False) -> list[DocumentRecord]:
        """Documents for ``owner_id``, newest first.

        Args:
            owner_id: Owner to scope the read to.
            with_embedding: Only return rows whose embedding is not null.
        """
        ...

    @abstractmethod
    def insert_document(self, document: NewDocument) -> DocumentRecord:
        """Insert a row and return it as stored."""
        ...

    @abstractmethod
    def delete_document(self, owner_id: str, document_id: str) -> DocumentRecord | None:
        """Delete one row; returns the deleted record or None if absent."""
        ...

    @abstractmethod
    def delete_by_owner(self, owner_id: str) -> list[DocumentRecord]:
        """Delete every row for ``owner_id`` and return what was removed."""
        ...

    @abstractmethod
    def has_document_named(self, owner_id: str, name: str) -> bool:
        """Whether ``owner_id`` already stores a file called ``name``."""
        ...
