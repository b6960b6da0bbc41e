"""Step-by-step health run of the conflict detection pipeline."""

import logging
from dataclasses import dataclass, field

import requests

from ..domain import ConflictReport
from ..domain.exceptions import ConfigurationError, SecondBrainError
from ..ports.embedding_port import EmbeddingPort
from ..ports.metadata_store_port import MetadataStorePort
from .conflict_detector import ConflictDetector
from .similarity_search import SimilaritySearch

logger = logging.getLogger(__name__)

SAMPLE_TEXT = "The weather today is sunny and warm. Perfect for a walk in the park."


@dataclass
class DiagnosticStep:
    name: str
    ok: bool
    message: str
    details: list[str] = field(default_factory=list)


@dataclass
class DiagnosticReport:
    owner_id: str
    steps: list[DiagnosticStep] = field(default_factory=list)
    conflict_report: ConflictReport | None = None

    @property
    def ok(self) -> bool:
        return bool(self.steps) and all(step.ok for step in self.steps)


class Diagnostics:
    """Runs each pipeline stage in turn and records what happened.

    Stops at the first failing stage. Only configuration errors escape.
    """

    def __init__(
        self,
        metadata_store: MetadataStorePort,
        embedder: EmbeddingPort,
        search: SimilaritySearch,
        detector: ConflictDetector,
    ) -> None:
        self.metadata_store = metadata_store
        self.embedder = embedder
        self.search = search
        self.detector = detector

    def run(
        self,
        owner_id: str,
        sample_text: str = SAMPLE_TEXT,
        threshold: float = 0.5,
    ) -> DiagnosticReport:
        report = DiagnosticReport(owner_id=owner_id)

        try:
            documents = self.metadata_store.list_documents(owner_id)
            embedded = sum(1 for d in documents if d.has_embedding)
            report.steps.append(
                DiagnosticStep(
                    name="stored files",
                    ok=True,
                    message=f"Found {len(documents)} file(s), {embedded} with embeddings",
                    details=[f"{d.name} (has embedding: {d.has_embedding})" for d in documents],
                )
            )

            embedding = self.embedder.generate_embedding(sample_text)
            if not embedding:
                report.steps.append(
                    DiagnosticStep("embedding", ok=False, message="No embedding generated")
                )
                return report
            report.steps.append(
                DiagnosticStep(
                    "embedding", ok=True, message=f"Embedding generated: {len(embedding)} dimensions"
                )
            )

            outcome = self.search.search(embedding, owner_id, threshold=threshold)
            path = "local fallback" if outcome.used_fallback else "search primitive"
            report.steps.append(
                DiagnosticStep(
                    name="similarity search",
                    ok=not outcome.failed,
                    message=(
                        f"Found {len(outcome.matches)} similar document(s) at threshold "
                        f"{threshold} via {path}"
                    ),
                    details=[f"{m.name}: {m.similarity * 100:.1f}%" for m in outcome.matches]
                    + ([f"note: {outcome.error}"] if outcome.error else []),
                )
            )
            if outcome.failed:
                return report

            conflict_report = self.detector.detect_conflicts(
                sample_text, "diagnostic-sample.txt", owner_id
            )
            report.conflict_report = conflict_report
            report.steps.append(
                DiagnosticStep(
                    name="conflict detection",
                    ok=conflict_report.error is None,
                    message=(
                        f"Has conflicts: {conflict_report.has_conflicts}, "
                        f"conflicts found: {len(conflict_report.conflicts)}"
                    ),
                    details=[f"error: {conflict_report.error}"] if conflict_report.error else [],
                )
            )
        except ConfigurationError:
            raise
        except (SecondBrainError, requests.RequestException) as e:
            logger.exception("Diagnostic run failed for owner %s", owner_id)
            step = len(report.steps) + 1
            report.steps.append(DiagnosticStep(f"step {step}", ok=False, message=str(e)))

        return report
