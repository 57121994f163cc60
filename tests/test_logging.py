"""Tests for logging utilities."""

import logging

import numpy as np

from numlab.linalg import gauss_elimination, jacobi
from numlab.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


def test_get_logger_prefixes_and_caches():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "numlab.test_module"
    assert get_logger("test_module") is logger
    assert get_logger("module1") is not get_logger("module2")
    assert logger.propagate is False


def test_get_logger_keeps_package_names():
    assert get_logger("numlab.linalg.iterative").name == "numlab.linalg.iterative"
    assert get_logger().name == "numlab"


def test_set_log_level_accepts_names_and_numbers():
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)

        set_log_level("40")
        assert logger.level == logging.ERROR
        # later loggers start at the current level
        assert get_logger("created_after_level_change").level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_solver_debug_output_is_captured(log_stream):
    gauss_elimination([[2.0, 1.0, 3.0], [1.0, 3.0, 5.0]])
    output = log_stream.getvalue()
    assert "[DEBUG] numlab.linalg.gauss: Gauss elimination solved 2 unknowns" in output


def test_loggers_created_after_configuration_use_its_stream(log_stream):
    get_logger("created_after_configure").info("late logger")
    assert "[INFO] numlab.created_after_configure: late logger" in log_stream.getvalue()


def test_configure_logging_custom_format(log_stream):
    configure_logging(level="INFO", format_string="%(levelname)s|%(message)s", stream=log_stream)
    logger = get_logger("test_module")
    logger.debug("hidden")
    logger.info("shown")
    assert log_stream.getvalue() == "INFO|shown\n"
    assert len(logger.handlers) == 1


def test_non_dominant_matrix_warning_is_logged(log_stream):
    jacobi(np.array([[1.0, 3.0], [2.0, 1.0]]), [1.0, 1.0], maxiter=5)
    assert "[WARNING] numlab.linalg.iterative" in log_stream.getvalue()
    assert "not diagonally dominant" in log_stream.getvalue()
