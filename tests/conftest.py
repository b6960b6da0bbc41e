"""
Pytest configuration and shared fixtures.
"""

import pytest

from second_brain.core.domain.exceptions import EmbeddingProviderError, SearchPrimitiveError
from tests.fakes import (
    FakeEmbedder,
    InMemoryBlobStore,
    InMemoryMetadataStore,
    StoreBackedSearchPrimitive,
    unit_vector,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (in-process HTTP/CLI)")


@pytest.fixture
def metadata_store():
    return InMemoryMetadataStore()


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def search_primitive(metadata_store):
    return StoreBackedSearchPrimitive(metadata_store)


@pytest.fixture
def seeded_store(metadata_store):
    """Owner with three embedded documents scoring 0.97, 0.90 and 0.40 against QUERY."""
    metadata_store.add("alice", "notes.txt", "Meeting notes about the launch", unit_vector(0.90))
    metadata_store.add("alice", "draft.txt", "Launch plan draft " * 10, unit_vector(0.97))
    metadata_store.add("alice", "recipe.txt", "Banana bread recipe", unit_vector(0.40))
    metadata_store.add("alice", "photo.png", None, None)
    metadata_store.add("bob", "launch.txt", "Bob's copy", unit_vector(0.99))
    return metadata_store


@pytest.fixture
def provider_error():
    return EmbeddingProviderError("Embedding API error: 429 - quota", status_code=429, body="quota")


@pytest.fixture
def primitive_error():
    return SearchPrimitiveError("function find_similar_documents does not exist")
