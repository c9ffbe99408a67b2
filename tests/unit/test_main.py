import json
from pathlib import Path

import pytest

from book_analyzer.main import (
    EXIT_CLIENT_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_OK,
    EXIT_UPSTREAM_ERROR,
    main,
)


@pytest.fixture()
def example_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANALYZER_PROVIDER", "example")


class TestMain:
    def test_prints_record_for_epub(
        self,
        tmp_path: Path,
        epub3_bytes: bytes,
        example_provider: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = tmp_path / "lighthouse.epub"
        path.write_bytes(epub3_bytes)
        assert main([str(path)]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["fileName"] == "lighthouse.epub"
        assert data["fileType"] == "epub"
        assert data["metadata"]["title"] == "The Lighthouse"

    def test_unsupported_file_exits_with_client_error(
        self,
        tmp_path: Path,
        example_provider: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("plain text")
        assert main([str(path)]) == EXIT_CLIENT_ERROR
        data = json.loads(capsys.readouterr().out)
        assert data["code"] == "INVALID_FILE_TYPE"
        assert data["error"] == "Invalid file type"

    def test_missing_file_exits_with_client_error(
        self,
        tmp_path: Path,
        example_provider: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert main([str(tmp_path / "missing.pdf")]) == EXIT_CLIENT_ERROR
        assert json.loads(capsys.readouterr().out)["code"] == "FILE_READ_ERROR"

    def test_analyzer_failure_exits_with_upstream_error(
        self,
        tmp_path: Path,
        epub3_bytes: bytes,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("ANALYZER_PROVIDER", "example")
        monkeypatch.setattr(
            "book_analyzer.analysis.example_client_adapter.OFFLINE_ANALYSIS",
            {"summary": "only a summary"},
        )
        path = tmp_path / "lighthouse.epub"
        path.write_bytes(epub3_bytes)
        assert main([str(path)]) == EXIT_UPSTREAM_ERROR
        assert json.loads(capsys.readouterr().out)["code"] == "AI_SERVICE_ERROR"

    def test_network_provider_without_timeout_exits_with_config_error(
        self,
        tmp_path: Path,
        epub3_bytes: bytes,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("ANALYZER_PROVIDER", "openai")
        monkeypatch.delenv("ANALYZER_TIMEOUT_SECONDS", raising=False)
        path = tmp_path / "lighthouse.epub"
        path.write_bytes(epub3_bytes)
        assert main([str(path)]) == EXIT_CONFIG_ERROR
        data = json.loads(capsys.readouterr().out)
        assert data["code"] == "CONFIG_ERROR"
        assert data["error"] == "Invalid configuration"
        assert "timeout" in data["message"].lower()

    def test_unknown_provider_is_reported_before_reading_the_file(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("ANALYZER_PROVIDER", "no-such-provider")
        monkeypatch.setenv("ANALYZER_TIMEOUT_SECONDS", "5")
        assert main([str(tmp_path / "missing.pdf")]) == EXIT_CONFIG_ERROR
        assert json.loads(capsys.readouterr().out)["code"] == "CONFIG_ERROR"

    def test_invalid_setting_value_exits_with_config_error(
        self,
        tmp_path: Path,
        example_provider: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("MAX_TEXT_LENGTH", "10")
        assert main([str(tmp_path / "missing.pdf")]) == EXIT_CONFIG_ERROR
        assert json.loads(capsys.readouterr().out)["code"] == "CONFIG_ERROR"
