"""Upload decision flow: analyze, optionally wait for the user, commit."""

import logging
import threading

from ..domain import (
    ConflictReport,
    DocumentRecord,
    EmbeddingVector,
    GateState,
    IncomingFile,
    NewDocument,
    PendingUpload,
    UploadOutcome,
    UploadStatus,
)
from ..domain.exceptions import (
    ConcurrentUploadError,
    DuplicateFileNameError,
    InvalidGateTransitionError,
    MetadataStoreError,
    PartialCommitError,
)
from ..ports.blob_store_port import BlobStorePort, blob_key
from ..ports.metadata_store_port import MetadataStorePort
from .conflict_detector import ConflictDetector

logger = logging.getLogger(__name__)


class UploadGate:
    """Finite-state upload flow for one client session.

    ``IDLE -> ANALYZING -> {COMMITTING | AWAITING_DECISION} -> IDLE``

    At most one upload is in flight. When analysis finds near-duplicates the
    upload is parked as a :class:`PendingUpload` until :meth:`proceed` or
    :meth:`cancel` is called. Files without text skip analysis.
    """

    def __init__(
        self,
        owner_id: str,
        detector: ConflictDetector,
        metadata_store: MetadataStorePort,
        blob_store: BlobStorePort,
    ) -> None:
        self.owner_id = owner_id
        self.detector = detector
        self.metadata_store = metadata_store
        self.blob_store = blob_store
        self._state = GateState.IDLE
        self._pending: PendingUpload | None = None
        self._report: ConflictReport | None = None
        self._lock = threading.Lock()

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def report(self) -> ConflictReport | None:
        """Report from the most recent analysis."""
        return self._report

    @property
    def pending(self) -> PendingUpload | None:
        return self._pending

    def start(self, file: IncomingFile) -> UploadOutcome:
        """Begin uploading ``file``.

        Returns:
            COMMITTED outcome, or AWAITING_DECISION when conflicts were found.

        Raises:
            ConcurrentUploadError: If another upload is outside IDLE.
            DuplicateFileNameError: If the owner already has a file of that name.
            StorageError: If the name lookup or the commit fails.
        """
        text = file.extract_text()
        has_text = bool(text and text.strip())
        with self._lock:
            if self._state is not GateState.IDLE:
                raise ConcurrentUploadError(
                    f"Cannot start uploading {file.name} while gate is {self._state.value}",
                    context={"owner_id": self.owner_id, "state": self._state.value},
                )
            self._state = GateState.ANALYZING if has_text else GateState.COMMITTING
            self._report = None

        try:
            self._require_unused_name(file.name)
        except Exception:
            self._state = GateState.IDLE
            raise

        if not has_text:
            logger.info("%s has no text to analyze, uploading directly", file.name)
            return self._commit(file, text, None, report=None)

        try:
            report = self.detector.detect_conflicts(text, file.name, self.owner_id)
        except Exception:
            self._state = GateState.IDLE
            raise
        self._report = report

        if report.has_conflicts:
            self._pending = PendingUpload(
                file=file, text=text, embedding=report.embedding, report=report
            )
            self._state = GateState.AWAITING_DECISION
            logger.info(
                "%s awaits a decision (%d conflict(s))", file.name, len(report.conflicts)
            )
            return UploadOutcome(status=UploadStatus.AWAITING_DECISION, report=report)

        if report.error:
            logger.warning("Uploading %s without a conflict check: %s", file.name, report.error)

        self._state = GateState.COMMITTING
        return self._commit(file, text, report.embedding, report=report)

    def proceed(self) -> UploadOutcome:
        """Accept the conflict warning and commit the pending upload.

        Reuses the embedding computed during analysis.
        """
        with self._lock:
            pending = self._require_pending("proceed")
            self._pending = None
            self._state = GateState.COMMITTING
        logger.info("Proceeding with %s despite conflicts", pending.file.name)
        return self._commit(pending.file, pending.text, pending.embedding, report=pending.report)

    def cancel(self) -> UploadOutcome:
        """Discard the pending upload without writing anything."""
        with self._lock:
            pending = self._require_pending("cancel")
            self._pending = None
            self._report = None
            self._state = GateState.IDLE
        logger.info("Upload of %s cancelled", pending.file.name)
        return UploadOutcome(status=UploadStatus.CANCELLED, report=pending.report)

    def _require_unused_name(self, name: str) -> None:
        # One blob per owner/name key; a second row would share and later lose it.
        if self.metadata_store.has_document_named(self.owner_id, name):
            raise DuplicateFileNameError(
                f"{name} already exists; delete it before uploading a new version",
                context={"owner_id": self.owner_id, "name": name},
            )

    def _require_pending(self, action: str) -> PendingUpload:
        if self._state is not GateState.AWAITING_DECISION or self._pending is None:
            raise InvalidGateTransitionError(
                f"Cannot {action}: no upload is awaiting a decision (gate is {self._state.value})",
                context={"owner_id": self.owner_id, "state": self._state.value},
            )
        return self._pending

    def _commit(
        self,
        file: IncomingFile,
        text: str | None,
        embedding: EmbeddingVector | None,
        report: ConflictReport | None,
    ) -> UploadOutcome:
        key = blob_key(self.owner_id, file.name)
        try:
            self.blob_store.upload(key, file.data, file.content_type)
            try:
                record = self._insert(file, text, embedding)
            except MetadataStoreError as e:
                logger.error(
                    "Metadata write failed after blob upload; orphaned blob %s is a repair candidate",
                    key,
                )
                raise PartialCommitError(
                    f"Uploaded {file.name} but could not save its metadata: {e.message}",
                    cause=e,
                    context={"blob_key": key, "owner_id": self.owner_id},
                ) from e
        finally:
            self._state = GateState.IDLE

        logger.info("Committed %s as %s", file.name, record.id)
        return UploadOutcome(
            status=UploadStatus.COMMITTED,
            record=record,
            report=report,
            warning=report.error if report else None,
        )

    def _insert(
        self, file: IncomingFile, text: str | None, embedding: EmbeddingVector | None
    ) -> DocumentRecord:
        return self.metadata_store.insert_document(
            NewDocument(
                owner_id=self.owner_id,
                name=file.name,
                size=file.size,
                mime_type=file.content_type,
                content=text,
                embedding=embedding,
            )
        )
