"""Unit tests for College ERP logging configuration."""

import logging
import tempfile
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from college_erp.logging import BACKUP_COUNT, MAX_BYTES, configure_logging, sanitize_for_log


@pytest.fixture(autouse=True)
def reset_logger():
    """Detach handlers so temp log files are not held open between tests."""
    yield
    logger = logging.getLogger("college_erp")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_console_only_by_default(self) -> None:
        logger = configure_logging()

        assert logger.name == "college_erp"
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

    def test_creates_log_directory(self) -> None:
        """Log directory is created if it doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir) / "nested" / "logs"
            configure_logging(log_dir=log_dir, console=False)

            assert log_dir.exists()

    def test_component_records_reach_file(self) -> None:
        """Module loggers propagate to the configured file with level and name."""
        with tempfile.TemporaryDirectory() as tmpdir:
            configure_logging(log_dir=tmpdir, console=False)
            logging.getLogger("college_erp.ledger.ledger").info("fine recorded")

            content = (Path(tmpdir) / "college_erp.log").read_text()
            assert " | INFO" in content
            assert " | college_erp.ledger.ledger | fine recorded" in content

    def test_level_filters_messages(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = configure_logging("warning", log_dir=tmpdir, console=False)
            logger.info("should not appear")
            logger.warning("should appear")

            content = (Path(tmpdir) / "college_erp.log").read_text()
            assert "should not appear" not in content
            assert "should appear" in content

    def test_unknown_level_raises(self) -> None:
        with pytest.raises(ValueError, match="VERBOSE"):
            configure_logging("VERBOSE")

    def test_no_duplicate_handlers_on_repeated_setup(self) -> None:
        """Repeated calls replace handlers instead of stacking them."""
        with tempfile.TemporaryDirectory() as tmpdir:
            configure_logging(log_dir=tmpdir)
            configure_logging(log_dir=tmpdir)

            assert len(logging.getLogger("college_erp").handlers) == 2

    def test_rotation_configured(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            logger = configure_logging(log_dir=tmpdir, console=False)

            (file_handler,) = logger.handlers
            assert isinstance(file_handler, RotatingFileHandler)
            assert file_handler.maxBytes == MAX_BYTES
            assert file_handler.backupCount == BACKUP_COUNT


@pytest.mark.unit
class TestSanitizeForLog:
    """Tests for sanitize_for_log function."""

    def test_redacts_keyword_values(self) -> None:
        result = sanitize_for_log("login email=a@b.c password=hunter2")

        assert "hunter2" not in result
        assert "password=[REDACTED]" in result
        assert "email=a@b.c" in result

    def test_redacts_dataclass_repr(self) -> None:
        result = sanitize_for_log("SignupProfile(email='a@b.c', credential='s3cret', name='A')")

        assert "s3cret" not in result
        assert "email='a@b.c'" in result

    def test_redacts_mapping(self) -> None:
        result = sanitize_for_log("{'email': 'a@b.c', 'password': 'hunter2'}")

        assert "hunter2" not in result
