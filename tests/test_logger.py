"""Tests for the shared logger setup."""

import logging

from scripts.lib.logger import get_logger, setup_logger


class TestSetupLogger:
    def test_does_not_propagate_to_root(self):
        logger = setup_logger("tests.logger.propagate", log_to_file=False)
        assert logger.propagate is False
        assert len(logger.handlers) == 1

    def test_single_line_with_root_handler(self):
        records = []

        class Collect(logging.Handler):
            def emit(self, record):
                records.append(record)

        root_handler = Collect()
        logging.getLogger().addHandler(root_handler)
        try:
            logger = setup_logger("tests.logger.root", log_to_file=False)
            logger.info("only once")
        finally:
            logging.getLogger().removeHandler(root_handler)
        assert records == []

    def test_handlers_added_once(self):
        first = setup_logger("tests.logger.once", log_to_file=False)
        second = setup_logger("tests.logger.once", log_to_file=False)
        assert first is second
        assert len(second.handlers) == 1

    def test_log_file(self, tmp_path):
        logger = setup_logger("tests.logger.file", log_to_file=True, log_dir=tmp_path)
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert list(tmp_path.glob("*_sales_monitor.log"))
        for handler in logger.handlers:
            handler.close()

    def test_get_logger_reuses_setup(self):
        setup_logger("tests.logger.shared", log_to_file=False)
        assert get_logger("tests.logger.shared").handlers
