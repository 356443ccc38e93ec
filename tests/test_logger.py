"""Tests for isicreate logging."""
import logging

from rich.logging import RichHandler

from isicreate.core import logger as logger_module


def test_get_logger_adds_one_rich_handler():
    log = logger_module.get_logger("isicreate.tests.sample")
    logger_module.get_logger("isicreate.tests.sample")

    assert sum(isinstance(h, RichHandler) for h in log.handlers) == 1
    assert log.level == logging.NOTSET
    assert log.getEffectiveLevel() <= logging.INFO


def test_verbose_file_logging_captures_module_debug(tmp_path, monkeypatch):
    """--verbose reaches debug lines from loggers created before it was set."""
    monkeypatch.setattr(logger_module, "_file_logging_configured", False)
    module_log = logger_module.get_logger("isicreate.tests.merge")
    package_log = logging.getLogger(logger_module.PACKAGE_LOGGER)
    handlers_before = list(package_log.handlers)
    level_before = package_log.level
    log_file = tmp_path / "logs" / "run.log"

    try:
        logger_module.setup_file_logging(log_file=str(log_file), verbose=True)
        module_log.debug("Merged template: 3 copied")
        for handler in package_log.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "isicreate logging initialized" in content
        assert "isicreate.tests.merge | DEBUG | Merged template: 3 copied" in content
    finally:
        for handler in package_log.handlers[len(handlers_before):]:
            handler.close()
            package_log.removeHandler(handler)
        package_log.setLevel(level_before)
