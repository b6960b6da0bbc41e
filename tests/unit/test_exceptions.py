"""Unit tests for exception handling system.

Tests both the exception hierarchy and the exception handler utilities,
including negative tests to verify correct exceptions are raised.
"""

import json
import logging

import pytest

from second_brain.adapters.common.exception_handler import (
    format_exception_json,
    get_error_code,
    get_http_status_code,
    log_exception,
)
from second_brain.core.domain.exceptions import (
    BlobStoreError,
    ConcurrentUploadError,
    ConfigurationError,
    DimensionMismatchError,
    DocumentNotFoundError,
    EmbeddingError,
    EmbeddingProviderError,
    EmbeddingResponseError,
    InvalidConfigurationError,
    InvalidGateTransitionError,
    InvalidSearchParameterError,
    MetadataStoreError,
    MissingAPIKeyError,
    PartialCommitError,
    SearchPrimitiveError,
    SearchPrimitiveUnavailableError,
    SecondBrainError,
    StorageError,
    UploadError,
    ValidationError,
    VectorSearchError,
)

# Apply @pytest.mark.unit to all tests in this module
pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    def test_second_brain_error_is_base(self):
        """SecondBrainError should be the base for all custom exceptions."""
        for cls in (
            ConfigurationError,
            EmbeddingError,
            VectorSearchError,
            StorageError,
            UploadError,
            ValidationError,
        ):
            assert issubclass(cls, SecondBrainError)

    def test_embedding_errors(self):
        assert issubclass(EmbeddingProviderError, EmbeddingError)
        assert issubclass(EmbeddingResponseError, EmbeddingProviderError)

    def test_storage_errors(self):
        for cls in (MetadataStoreError, BlobStoreError, DocumentNotFoundError, PartialCommitError):
            assert issubclass(cls, StorageError)

    def test_search_errors(self):
        assert issubclass(SearchPrimitiveError, VectorSearchError)
        assert issubclass(SearchPrimitiveUnavailableError, SearchPrimitiveError)

    def test_upload_and_validation_errors(self):
        assert issubclass(ConcurrentUploadError, UploadError)
        assert issubclass(InvalidGateTransitionError, UploadError)
        assert issubclass(DimensionMismatchError, ValidationError)
        assert issubclass(InvalidSearchParameterError, ValidationError)

    def test_config_errors_inherit_from_configuration(self):
        assert issubclass(MissingAPIKeyError, ConfigurationError)
        assert issubclass(InvalidConfigurationError, ConfigurationError)

    def test_error_codes_are_unique(self):
        classes = [
            SecondBrainError,
            ConfigurationError,
            MissingAPIKeyError,
            InvalidConfigurationError,
            EmbeddingError,
            EmbeddingProviderError,
            EmbeddingResponseError,
            VectorSearchError,
            SearchPrimitiveError,
            SearchPrimitiveUnavailableError,
            StorageError,
            MetadataStoreError,
            BlobStoreError,
            DocumentNotFoundError,
            PartialCommitError,
            UploadError,
            ConcurrentUploadError,
            InvalidGateTransitionError,
            ValidationError,
            DimensionMismatchError,
            InvalidSearchParameterError,
        ]
        codes = [cls.error_code for cls in classes]
        assert len(codes) == len(set(codes))
        assert all(code.startswith("SB_") for code in codes)


class TestExceptionCreation:
    """Tests for creating and using exceptions."""

    def test_basic_exception_creation(self):
        exc = SecondBrainError("Test error message")
        assert str(exc) == "Test error message"
        assert exc.message == "Test error message"
        assert exc.error_code == "SB_ERR_001"

    def test_exception_with_context(self):
        exc = MetadataStoreError("Insert failed", context={"table": "files", "owner_id": "alice"})
        assert exc.extra_context["table"] == "files"
        assert exc.extra_context["owner_id"] == "alice"

    def test_exception_with_cause(self):
        original = ConnectionError("Network unreachable")
        exc = BlobStoreError("Upload failed", cause=original)
        assert exc.cause is original

    def test_location_is_captured(self):
        exc = ValidationError("bad input")
        assert exc.location.file_name is not None
        assert exc.location.method_name is not None
        assert exc.location.line_number > 0

    def test_location_points_at_raise_site(self):
        class Adapter:
            def call(self):
                raise EmbeddingProviderError("quota", status_code=429)

        with pytest.raises(EmbeddingProviderError) as exc_info:
            Adapter().call()

        location = exc_info.value.location
        assert location.class_name == "Adapter"
        assert location.method_name == "call"
        assert location.file_name == "test_exceptions.py"

    def test_location_outside_a_method(self):
        exc = MetadataStoreError("down")
        assert exc.location.class_name == "TestExceptionCreation"
        assert exc.location.method_name == "test_location_outside_a_method"

    def test_provider_error_carries_status_and_body(self):
        exc = EmbeddingProviderError("quota", status_code=429, body='{"error": "quota"}')
        assert exc.status_code == 429
        assert exc.body == '{"error": "quota"}'
        assert exc.extra_context == {"status_code": 429, "body": '{"error": "quota"}'}

    def test_provider_error_without_response(self):
        exc = EmbeddingProviderError("timed out", context={"timeout": 10})
        assert exc.status_code is None
        assert exc.extra_context == {"timeout": 10}


class TestExceptionSerialization:
    def test_to_dict_basic(self):
        exc = DocumentNotFoundError("Document 42 not found")
        result = exc.to_dict()

        assert result["error"] == {
            "type": "DocumentNotFoundError",
            "code": "SB_STO_004",
            "message": "Document 42 not found",
        }
        assert "location" in result
        assert "context" not in result
        assert "cause" not in result

    def test_to_dict_with_cause_and_context(self):
        exc = PartialCommitError(
            "metadata write failed",
            cause=MetadataStoreError("insert rejected"),
            context={"blob_key": "alice/a.txt"},
        )
        result = exc.to_dict()

        assert result["context"] == {"blob_key": "alice/a.txt"}
        assert result["cause"] == {"type": "MetadataStoreError", "message": "insert rejected"}

    def test_to_dict_is_json_serializable(self):
        exc = SearchPrimitiveError("rpc failed", context={"status": 404})
        json.dumps(exc.to_dict(include_trace=True))


class TestExceptionHandler:
    def test_format_custom_exception(self):
        result = format_exception_json(UploadError("busy"), extra_context={"path": "/x"})
        assert result["error"]["code"] == "SB_UPL_001"
        assert result["context"]["path"] == "/x"

    def test_format_standard_exception(self):
        try:
            raise KeyError("missing")
        except KeyError as e:
            result = format_exception_json(e, include_trace=True)

        assert result["error"]["type"] == "KeyError"
        assert result["error"]["code"] == "PYTHON_ERR"
        assert result["location"]["file"] == "test_exceptions.py"
        assert result["stack_trace"]

    def test_get_error_code(self):
        assert get_error_code(PartialCommitError("x")) == "SB_STO_005"
        assert get_error_code(RuntimeError("x")) == "PYTHON_ERR"

    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (InvalidSearchParameterError("bad threshold"), 400),
            (DimensionMismatchError("bad dims"), 400),
            (DocumentNotFoundError("gone"), 404),
            (ConcurrentUploadError("busy"), 409),
            (InvalidGateTransitionError("nothing pending"), 409),
            (EmbeddingProviderError("quota", status_code=429), 502),
            (MetadataStoreError("down"), 503),
            (PartialCommitError("half"), 503),
            (SearchPrimitiveError("rpc"), 503),
            (MissingAPIKeyError("no key"), 500),
            (SecondBrainError("generic"), 500),
            (ValueError("bad"), 400),
            (TimeoutError("slow"), 503),
            (ConnectionError("refused"), 503),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_http_status_mapping(self, exc, status):
        assert get_http_status_code(exc) == status

    def test_log_exception_emits_json(self, caplog):
        log = logging.getLogger("second_brain.test")
        with caplog.at_level(logging.WARNING, logger="second_brain.test"):
            log_exception(BlobStoreError("down"), log=log, level=logging.WARNING)

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["error"]["code"] == "SB_STO_003"
