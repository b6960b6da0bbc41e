"""Unit tests for the Diagnostics pipeline run."""

import pytest

from second_brain.core.domain.exceptions import MissingAPIKeyError
from second_brain.core.services import ConflictDetector, Diagnostics, SimilaritySearch
from second_brain.core.services.diagnostics import SAMPLE_TEXT
from tests.fakes import QUERY, FakeEmbedder

pytestmark = pytest.mark.unit


@pytest.fixture
def embedder():
    return FakeEmbedder({SAMPLE_TEXT: QUERY})


@pytest.fixture
def diagnostics(embedder, seeded_store, search_primitive):
    search = SimilaritySearch(seeded_store, search_primitive)
    return Diagnostics(seeded_store, embedder, search, ConflictDetector(embedder, search))


def test_full_run_succeeds(diagnostics):
    report = diagnostics.run("alice")

    assert report.ok
    assert [s.name for s in report.steps] == [
        "stored files",
        "embedding",
        "similarity search",
        "conflict detection",
    ]
    assert report.steps[0].message == "Found 4 file(s), 3 with embeddings"
    assert "photo.png (has embedding: False)" in report.steps[0].details
    assert report.steps[1].message == "Embedding generated: 2 dimensions"
    assert report.conflict_report.has_conflicts is True


def test_search_uses_lowered_threshold(diagnostics):
    """At 0.5 the 0.40 recipe is excluded but both launch documents match."""
    report = diagnostics.run("alice", threshold=0.5)

    search_step = report.steps[2]
    assert search_step.message.startswith("Found 2 similar document(s) at threshold 0.5")
    assert search_step.details[0].startswith("draft.txt: 97.0%")


def test_custom_sample_text(diagnostics, embedder):
    diagnostics.run("alice", sample_text="Something else entirely")
    assert embedder.calls[0] == "Something else entirely"


def test_no_embedding_stops_run(seeded_store, search_primitive):
    embedder = FakeEmbedder()
    search = SimilaritySearch(seeded_store, search_primitive)
    diagnostics = Diagnostics(seeded_store, embedder, search, ConflictDetector(embedder, search))

    report = diagnostics.run("alice", sample_text="   ")

    assert not report.ok
    assert report.steps[-1].name == "embedding"
    assert report.steps[-1].message == "No embedding generated"


def test_provider_failure_recorded(diagnostics, embedder, provider_error):
    embedder.error = provider_error

    report = diagnostics.run("alice")

    assert not report.ok
    assert len(report.steps) == 2
    assert report.steps[1].name == "step 2"
    assert "429" in report.steps[1].message


def test_search_failure_recorded(diagnostics, seeded_store, search_primitive, primitive_error):
    search_primitive.error = primitive_error
    seeded_store.fail_reads = True

    report = diagnostics.run("alice")

    assert not report.ok
    # listing files already fails before the search
    assert report.steps[0].name == "step 1"


def test_fallback_noted(diagnostics, search_primitive, primitive_error):
    search_primitive.error = primitive_error

    report = diagnostics.run("alice")

    assert report.ok
    search_step = report.steps[2]
    assert "via local fallback" in search_step.message
    assert any(d.startswith("note: ") for d in search_step.details)


def test_configuration_error_propagates(diagnostics, embedder):
    embedder.error = MissingAPIKeyError("OPENAI_API_KEY is not set")

    with pytest.raises(MissingAPIKeyError):
        diagnostics.run("alice")
