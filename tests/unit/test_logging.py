"""Unit tests for boardtables logging configuration."""

import logging
import tempfile
from pathlib import Path

import pytest

from boardtables.logging import sanitize_for_log, setup_logging, truncate_output


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers added by a test."""
    yield
    logger = logging.getLogger("boardtables")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """No file handler without a log directory."""
        monkeypatch.delenv("BOARDTABLES_LOG_DIR", raising=False)

        logger = setup_logging()

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_writes_to_log_file(self) -> None:
        """Component loggers write to the rotating file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup_logging(log_dir=Path(tmpdir) / "logs", console=False)
            logging.getLogger("boardtables.board.aggregator").info("fetched 3 columns")

            content = (Path(tmpdir) / "logs" / "boardtables.log").read_text()
            assert " | INFO" in content
            assert "boardtables.board.aggregator" in content
            assert "fetched 3 columns" in content

    def test_log_dir_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """BOARDTABLES_LOG_DIR enables the file handler."""
        with tempfile.TemporaryDirectory() as tmpdir:
            monkeypatch.setenv("BOARDTABLES_LOG_DIR", tmpdir)
            setup_logging(console=False)

            assert (Path(tmpdir) / "boardtables.log").exists()

    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """BOARDTABLES_LOG_LEVEL sets the level."""
        monkeypatch.setenv("BOARDTABLES_LOG_LEVEL", "DEBUG")

        logger = setup_logging(console=False)

        assert logger.level == logging.DEBUG

    def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
        """Calling setup twice leaves one console handler."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1


@pytest.mark.unit
class TestSanitizeForLog:
    """Tests for sanitize_for_log."""

    def test_redacts_classic_token(self) -> None:
        """Personal access tokens are replaced."""
        text = "token ghp_" + "a" * 36 + " leaked"

        assert sanitize_for_log(text) == "token [GITHUB_TOKEN] leaked"

    def test_redacts_bearer_header(self) -> None:
        """Bearer credentials are replaced regardless of case."""
        assert sanitize_for_log("Authorization: bearer abc.def") == (
            "Authorization: bearer [REDACTED]"
        )

    def test_leaves_plain_text(self) -> None:
        """Ordinary messages are unchanged."""
        assert sanitize_for_log("Bad credentials") == "Bad credentials"


@pytest.mark.unit
class TestTruncateOutput:
    """Tests for truncate_output."""

    def test_short_output_unchanged(self) -> None:
        assert truncate_output("short", max_length=10) == "short"

    def test_long_output_truncated(self) -> None:
        """Truncated output reports how much was dropped."""
        result = truncate_output("x" * 30, max_length=10)

        assert result.startswith("x" * 10)
        assert "20 more chars" in result
