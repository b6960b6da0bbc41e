"""SQLite metadata store for local development and single-user installs."""

import json
import logging
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

from ....core.domain import DocumentRecord, NewDocument
from ....core.domain.exceptions import MetadataStoreError
from ....core.ports.metadata_store_port import MetadataStorePort

logger = logging.getLogger(__name__)

SELECT_COLUMNS = "id, user_id, name, size, type, content, embedding, created_at"


class SQLiteMetadataStore(MetadataStorePort):
    """``files`` table in a local SQLite database.

    Vectors are stored as JSON text. There is no nearest-neighbour primitive
    here, so similarity search always uses the local scan.
    """

    def __init__(self, db_path: str | Path = "data/second_brain.db") -> None:
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_db()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_db(self) -> None:
        """Initialize the database schema."""
        try:
            with self._connect() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS files (
                        id TEXT PRIMARY KEY,
                        user_id TEXT NOT NULL,
                        name TEXT NOT NULL,
                        size INTEGER NOT NULL DEFAULT 0,
                        type TEXT,
                        content TEXT,
                        embedding TEXT,
                        created_at TIMESTAMP NOT NULL
                    )
                """)
                conn.execute("""
                    CREATE INDEX IF NOT EXISTS idx_files_user_created
                    ON files(user_id, created_at)
                """)
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize database: {e}")
            raise MetadataStoreError(
                f"Failed to initialize {self.db_path}", cause=e, context={"path": str(self.db_path)}
            ) from e

    @staticmethod
    def _to_record(row: tuple) -> DocumentRecord:
        doc_id, user_id, name, size, mime_type, content, embedding, created_at = row
        return DocumentRecord(
            id=doc_id,
            owner_id=user_id,
            name=name,
            size=size or 0,
            mime_type=mime_type or "",
            content=content,
            embedding=json.loads(embedding) if embedding else None,
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )

    def _fetch(self, sql: str, params: tuple) -> list[DocumentRecord]:
        try:
            with self._connect() as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise MetadataStoreError(f"Metadata query failed: {e}", cause=e) from e
        return self._decode(rows)

    def _decode(self, rows: list[tuple]) -> list[DocumentRecord]:
        records = []
        for row in rows:
            try:
                records.append(self._to_record(row))
            except (ValueError, TypeError) as e:
                raise MetadataStoreError(
                    f"Corrupt row {row[0]} in {self.db_path}: {e}",
                    cause=e,
                    context={"document_id": row[0], "owner_id": row[1]},
                ) from e
        return records

    def list_documents(self, owner_id: str, with_embedding: bool = False) -> list[DocumentRecord]:
        sql = f"SELECT {SELECT_COLUMNS} FROM files WHERE user_id = ?"
        if with_embedding:
            sql += " AND embedding IS NOT NULL"
        sql += " ORDER BY created_at DESC, rowid DESC"
        return self._fetch(sql, (owner_id,))

    def has_document_named(self, owner_id: str, name: str) -> bool:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT 1 FROM files WHERE user_id = ? AND name = ? LIMIT 1", (owner_id, name)
                ).fetchone()
        except sqlite3.Error as e:
            raise MetadataStoreError(f"Name lookup failed: {e}", cause=e) from e
        return row is not None

    def insert_document(self, document: NewDocument) -> DocumentRecord:
        record = DocumentRecord(
            id=str(uuid.uuid4()),
            owner_id=document.owner_id,
            name=document.name,
            size=document.size,
            mime_type=document.mime_type,
            content=document.content,
            embedding=document.embedding,
            created_at=datetime.now(),
        )
        try:
            with self._connect() as conn:
                conn.execute(
                    f"INSERT INTO files ({SELECT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        record.id,
                        record.owner_id,
                        record.name,
                        record.size,
                        record.mime_type,
                        record.content,
                        json.dumps(record.embedding) if record.embedding is not None else None,
                        record.created_at.isoformat(),
                    ),
                )
        except sqlite3.Error as e:
            raise MetadataStoreError(
                f"Failed to insert {document.name}: {e}",
                cause=e,
                context={"owner_id": document.owner_id},
            ) from e
        return record

    def delete_document(self, owner_id: str, document_id: str) -> DocumentRecord | None:
        removed = self._delete("id = ? AND user_id = ?", (document_id, owner_id))
        return removed[0] if removed else None

    def delete_by_owner(self, owner_id: str) -> list[DocumentRecord]:
        return self._delete("user_id = ?", (owner_id,))

    def _delete(self, where: str, params: tuple) -> list[DocumentRecord]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    f"SELECT {SELECT_COLUMNS} FROM files WHERE {where}", params
                ).fetchall()
                conn.execute(f"DELETE FROM files WHERE {where}", params)
        except sqlite3.Error as e:
            raise MetadataStoreError(f"Metadata delete failed: {e}", cause=e) from e
        return self._decode(rows)
