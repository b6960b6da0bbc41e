"""Unit tests for settings and logging configuration."""

import json
import logging
import sys

import pytest
from pydantic import ValidationError

from second_brain.composition.container import Container
from second_brain.config.logging import (
    ROOT_LOGGER,
    JSONExceptionFormatter,
    get_logger,
    setup_logging,
)
from second_brain.config.settings import Settings
from second_brain.core.domain.exceptions import MissingAPIKeyError
from second_brain.core.services import SimilaritySearch

pytestmark = pytest.mark.unit


class TestSettings:
    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.embedding_model == "text-embedding-ada-002"
        assert config.similarity_threshold == 0.85
        assert config.match_count == 5
        assert config.request_timeout == 10.0
        assert config.storage_backend == "local"

    def test_secrets_sanitized(self):
        config = Settings(_env_file=None, openai_api_key="\ufeffsk-abc \n")
        assert config.openai_api_key == "sk-abc"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SIMILARITY_THRESHOLD", "0.9")
        monkeypatch.setenv("STORAGE_BACKEND", "supabase")

        config = Settings(_env_file=None)

        assert config.similarity_threshold == 0.9
        assert config.storage_backend == "supabase"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"similarity_threshold": 1.2},
            {"match_count": 0},
            {"storage_backend": "s3"},
            {"request_timeout": 0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **overrides)

    def test_local_paths(self, tmp_path):
        config = Settings(_env_file=None, data_dir=tmp_path / "data")
        config.ensure_directories()

        assert config.sqlite_path == tmp_path / "data" / "second_brain.db"
        assert config.blob_dir.is_dir()


class TestContainer:
    def test_local_backend_has_no_search_primitive(self, tmp_path):
        container = Container(Settings(_env_file=None, data_dir=tmp_path))

        search = container.similarity_search()

        assert isinstance(search, SimilaritySearch)
        assert search.search_primitive is None
        assert (tmp_path / "second_brain.db").exists()

    def test_missing_embedding_key(self, tmp_path):
        container = Container(Settings(_env_file=None, openai_api_key="", data_dir=tmp_path))

        with pytest.raises(MissingAPIKeyError):
            container.conflict_detector()

    def test_supabase_requires_credentials(self):
        container = Container(Settings(_env_file=None, storage_backend="supabase"))

        with pytest.raises(MissingAPIKeyError):
            container.metadata_store()


class TestLogging:
    @pytest.fixture(autouse=True)
    def reset_handlers(self):
        yield
        logger = logging.getLogger(ROOT_LOGGER)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_setup_logging_configures_package_logger(self):
        logger = setup_logging("DEBUG")

        assert logger.name == ROOT_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_setup_logging_is_idempotent(self, tmp_path):
        setup_logging("INFO")
        logger = setup_logging("INFO", log_file=tmp_path / "logs" / "app.log")

        assert len(logger.handlers) == 2
        assert (tmp_path / "logs" / "app.log").exists()

    def test_get_logger_is_child(self):
        assert get_logger("api").name == "second_brain.api"
        assert get_logger().name == ROOT_LOGGER

    def test_json_formatter_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.getLogger("x").makeRecord(
                "x", logging.ERROR, __file__, 1, "failed %s", ("op",), sys.exc_info()
            )

        payload = json.loads(JSONExceptionFormatter().format(record))

        assert payload["message"] == "failed op"
        assert payload["level"] == "ERROR"
        assert payload["exception"]["type"] == "RuntimeError"
        assert "boom" in payload["exception"]["traceback"]
