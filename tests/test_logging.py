"""
Tests for logger setup.
"""

import logging

import pytest

from facloc_opt.logging import setup_logger


@pytest.fixture
def logger_name(request):
    name = f"facloc_opt.test.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetupLogger:
    """Test console and file handler setup."""

    def test_console_only_without_log_dir(self, logger_name):
        logger = setup_logger(logger_name, console_level="WARNING")
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], logging.FileHandler)
        assert logger.handlers[0].level == logging.WARNING
        print("✅ Console handler only when no log_dir is given")

    def test_file_handler_with_log_dir(self, logger_name, tmp_path):
        logger = setup_logger(logger_name, log_dir=str(tmp_path / "logs"), log_file="opt.log")
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

        logger.debug("swarm ready")
        file_handlers[0].flush()
        assert "swarm ready" in (tmp_path / "logs" / "opt.log").read_text(encoding="utf-8")
        print("✅ File handler writes DEBUG records to log_dir/log_file")

    def test_repeated_setup_keeps_handlers(self, logger_name):
        setup_logger(logger_name)
        logger = setup_logger(logger_name)
        assert len(logger.handlers) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
