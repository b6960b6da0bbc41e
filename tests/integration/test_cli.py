"""Integration tests for the typer CLI."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from second_brain.adapters.inbound.cli import app
from second_brain.composition.container import Container
from second_brain.config.settings import Settings
from tests.fakes import QUERY, FakeEmbedder

pytestmark = pytest.mark.integration

DUPLICATE = "Launch plan for the new product line"
FRESH = "Grocery list: apples, oats, coffee"

runner = CliRunner()


@pytest.fixture
def container(tmp_path, seeded_store, blob_store):
    config = Settings(_env_file=None, openai_api_key="sk-test", data_dir=tmp_path / "data")
    container = Container(config)
    container._metadata_store = seeded_store
    container._blob_store = blob_store
    container._embedder = FakeEmbedder({DUPLICATE: QUERY, FRESH: [-1.0, 0.0]})
    return container


@pytest.fixture(autouse=True)
def patched_cli(container):
    with (
        patch("second_brain.adapters.inbound.cli.commands.get_container") as mock_get_container,
        patch("second_brain.adapters.inbound.cli.commands.setup_logging"),
    ):
        mock_get_container.return_value = container
        yield


@pytest.fixture
def write_file(tmp_path):
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestFilesCommands:
    def test_files_lists_owner_files(self):
        result = runner.invoke(app, ["files", "--user", "alice"])

        assert result.exit_code == 0
        assert "Your Files (4)" in result.output
        assert "draft.txt" in result.output

    def test_files_empty(self):
        result = runner.invoke(app, ["files", "--user", "nobody"])

        assert result.exit_code == 0
        assert "No files uploaded yet" in result.output

    def test_files_store_error(self, seeded_store):
        seeded_store.fail_reads = True

        result = runner.invoke(app, ["files", "--user", "alice"])

        assert result.exit_code == 1
        assert "SB_STO_002" in result.output

    def test_delete_with_force(self, blob_store):
        result = runner.invoke(app, ["delete", "doc-1", "--user", "alice", "--force"])

        assert result.exit_code == 0
        assert "Deleted notes.txt" in result.output
        assert blob_store.deleted == ["alice/notes.txt"]

    def test_delete_declined(self, seeded_store):
        result = runner.invoke(app, ["delete", "doc-1", "--user", "alice"], input="n\n")

        assert result.exit_code == 0
        assert len(seeded_store.records) == 5

    def test_delete_unknown(self):
        result = runner.invoke(app, ["delete", "doc-5", "--user", "alice", "--force"])

        assert result.exit_code == 1
        assert "SB_STO_004" in result.output

    def test_clear(self, seeded_store):
        result = runner.invoke(app, ["clear", "--user", "alice", "--force"])

        assert result.exit_code == 0
        assert "All files deleted (4)" in result.output
        assert [r.owner_id for r in seeded_store.records] == ["bob"]


class TestUploadCommand:
    def test_clean_upload(self, write_file, blob_store):
        path = write_file("groceries.txt", FRESH)

        result = runner.invoke(app, ["upload", str(path), "--user", "alice"])

        assert result.exit_code == 0
        assert "File uploaded successfully!" in result.output
        assert blob_store.uploads == ["alice/groceries.txt"]

    def test_conflict_declined(self, write_file, blob_store, seeded_store):
        path = write_file("plan.txt", DUPLICATE)

        result = runner.invoke(app, ["upload", str(path), "--user", "alice"], input="n\n")

        assert result.exit_code == 0
        assert "97%" in result.output
        assert "Upload cancelled" in result.output
        assert blob_store.uploads == []
        assert seeded_store.inserts == []

    def test_conflict_accepted(self, write_file, blob_store):
        path = write_file("plan.txt", DUPLICATE)

        result = runner.invoke(app, ["upload", str(path), "--user", "alice"], input="y\n")

        assert result.exit_code == 0
        assert "File uploaded successfully!" in result.output
        assert blob_store.uploads == ["alice/plan.txt"]

    def test_conflict_yes_flag(self, write_file, blob_store):
        path = write_file("plan.txt", DUPLICATE)

        result = runner.invoke(app, ["upload", str(path), "--user", "alice", "--yes"])

        assert result.exit_code == 0
        assert blob_store.uploads == ["alice/plan.txt"]

    def test_binary_upload(self, write_file, container):
        path = write_file("scan.png", b"\x89PNG\r\n")

        result = runner.invoke(app, ["upload", str(path), "--user", "alice"])

        assert result.exit_code == 0
        assert container._embedder.calls == []

    def test_degraded_check_warns(self, write_file, container, provider_error):
        container._embedder.error = provider_error
        path = write_file("plan.txt", DUPLICATE)

        result = runner.invoke(app, ["upload", str(path), "--user", "alice"])

        assert result.exit_code == 0
        assert "could not check for conflicts" in result.output
        assert "File uploaded successfully!" in result.output

    def test_existing_name_rejected(self, write_file, blob_store):
        path = write_file("notes.txt", FRESH)

        result = runner.invoke(app, ["upload", str(path), "--user", "alice"])

        assert result.exit_code == 1
        assert "SB_UPL_004" in result.output
        assert blob_store.uploads == []

    def test_partial_commit_fails(self, write_file, seeded_store):
        seeded_store.fail_inserts = True
        path = write_file("groceries.txt", FRESH)

        result = runner.invoke(app, ["upload", str(path), "--user", "alice"])

        assert result.exit_code == 1
        assert "SB_STO_005" in result.output


class TestCheckCommand:
    def test_reports_conflicts(self, write_file, blob_store):
        path = write_file("plan.txt", DUPLICATE)

        result = runner.invoke(app, ["check", str(path), "--user", "alice"])

        assert result.exit_code == 0
        assert "Similar content found for plan.txt" in result.output
        assert "notes.txt" in result.output
        assert blob_store.uploads == []

    def test_clean(self, write_file):
        path = write_file("groceries.txt", FRESH)

        result = runner.invoke(app, ["check", str(path), "--user", "alice"])

        assert "No similar content found" in result.output

    def test_non_text_file(self, write_file):
        path = write_file("photo.png", b"\x89PNG")

        result = runner.invoke(app, ["check", str(path), "--user", "alice"])

        assert result.exit_code == 0
        assert "not a text file" in result.output


class TestDiagnoseCommand:
    def test_all_steps_pass(self):
        result = runner.invoke(app, ["diagnose", "--user", "alice"])

        assert result.exit_code == 0
        assert "stored files" in result.output
        assert "conflict detection" in result.output

    def test_failure_exits_nonzero(self, container, provider_error):
        container._embedder.error = provider_error

        result = runner.invoke(app, ["diagnose", "--user", "alice"])

        assert result.exit_code == 1
        assert "429" in result.output


def test_status_reports_file_counts():
    result = runner.invoke(app, ["status", "--user", "alice"])

    assert result.exit_code == 0
    assert "Storage backend" in result.output
    assert "4 file(s) stored, 3 with embeddings" in result.output
