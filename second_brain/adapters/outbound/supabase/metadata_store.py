"""Supabase ``files`` table as the metadata store."""

import logging
from typing import Any

import requests
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from ....core.domain import DocumentRecord, NewDocument
from ....core.domain.exceptions import MetadataStoreError
from ....core.ports.metadata_store_port import MetadataStorePort
from .client import SupabaseClient
from .rows import FileRow

logger = logging.getLogger(__name__)

FILES_TABLE = "files"
FILE_COLUMNS = "id,user_id,name,size,type,content,embedding,created_at"

_rows = TypeAdapter(list[FileRow])


class SupabaseMetadataStore(MetadataStorePort):
    """Reads and writes file rows through PostgREST."""

    def __init__(self, client: SupabaseClient, table: str = FILES_TABLE) -> None:
        self.client = client
        self.table = table

    def _call(self, method: str, params: dict[str, str], **kwargs: Any) -> list[DocumentRecord]:
        url = self.client.rest_url(self.table)
        try:
            response = self.client.request(method, url, params=params, **kwargs)
            payload = response.json() if response.content else []
            return [row.to_record() for row in _rows.validate_python(payload)]
        except requests.RequestException as e:
            raise MetadataStoreError(
                f"Metadata {method} on {self.table} failed: {e}",
                cause=e,
                context={"table": self.table, "params": params},
            ) from e
        except (ValueError, SchemaValidationError) as e:
            raise MetadataStoreError(
                f"Unexpected {self.table} rows from metadata store",
                cause=e,
                context={"table": self.table},
            ) from e

    def list_documents(self, owner_id: str, with_embedding: bool = False) -> list[DocumentRecord]:
        params = {
            "select": FILE_COLUMNS,
            "user_id": f"eq.{owner_id}",
            "order": "created_at.desc",
        }
        if with_embedding:
            params["embedding"] = "not.is.null"
        records = self._call("GET", params)
        logger.debug("Fetched %d file row(s) for owner %s", len(records), owner_id)
        return records

    def insert_document(self, document: NewDocument) -> DocumentRecord:
        body = {
            "user_id": document.owner_id,
            "name": document.name,
            "size": document.size,
            "type": document.mime_type,
            "content": document.content,
            "embedding": document.embedding,
        }
        records = self._call(
            "POST",
            {"select": FILE_COLUMNS},
            json=body,
            headers={"Prefer": "return=representation"},
        )
        if not records:
            raise MetadataStoreError(
                f"Insert into {self.table} returned no row", context={"name": document.name}
            )
        return records[0]

    def delete_document(self, owner_id: str, document_id: str) -> DocumentRecord | None:
        records = self._call(
            "DELETE",
            {"id": f"eq.{document_id}", "user_id": f"eq.{owner_id}", "select": FILE_COLUMNS},
            headers={"Prefer": "return=representation"},
        )
        return records[0] if records else None

    def delete_by_owner(self, owner_id: str) -> list[DocumentRecord]:
        return self._call(
            "DELETE",
            {"user_id": f"eq.{owner_id}", "select": FILE_COLUMNS},
            headers={"Prefer": "return=representation"},
        )

    def has_document_named(self, owner_id: str, name: str) -> bool:
        params = {"select": "id", "user_id": f"eq.{owner_id}", "name": f"eq.{name}", "limit": "1"}
        try:
            response = self.client.request("GET", self.client.rest_url(self.table), params=params)
            return bool(response.json())
        except requests.RequestException as e:
            raise MetadataStoreError(
                f"Name lookup on {self.table} failed: {e}",
                cause=e,
                context={"table": self.table, "name": name},
            ) from e
        except ValueError as e:
            raise MetadataStoreError(
                f"Unexpected name lookup response from {self.table}", cause=e
            ) from e
