"""Tests for package logging setup."""

from __future__ import annotations

import logging

from hydropy import setup_logging
from hydropy.transform import remove_hs
from hydropy.types import Molecule


class TestSetupLogging:

    def teardown_method(self) -> None:
        logger = logging.getLogger("hydropy")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)

    def test_console_handler(self) -> None:
        logger = setup_logging(logging.DEBUG)
        assert logger.name == "hydropy"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_setup_replaces_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path) -> None:
        log_file = tmp_path / "hydropy.log"
        logger = setup_logging(logging.WARNING, log_file=str(log_file))
        assert len(logger.handlers) == 2

        mol = Molecule()
        mol.add_atom("H")
        remove_hs(mol, sanitize=False)
        for handler in logger.handlers:
            handler.flush()

        assert "without neighbors" in log_file.read_text(encoding="utf-8")
