"""Tests for the records the package emits and how their level is controlled."""

import logging
from io import StringIO

import pytest

from exhaustigen.config import EnumerationConfig
from exhaustigen.gen import Gen
from exhaustigen.logging import (
    DEFAULT_LEVEL,
    ROOT_LOGGER_NAME,
    get_logger,
    reset_logging,
    set_level,
    setup_root_logger,
)
from exhaustigen.runner import exhaust


@pytest.fixture
def capture():
    """Route the package root logger into a buffer with a bare message format."""
    reset_logging()
    buffer = StringIO()
    setup_root_logger(
        handler=logging.StreamHandler(buffer),
        format_string="%(levelname)s|%(name)s|%(message)s",
    )
    yield buffer
    reset_logging()
    setup_root_logger()


def test_module_loggers_hang_off_package_root(capture):
    logger = get_logger("exhaustigen.runner")
    assert logger.level == logging.NOTSET
    assert logger.getEffectiveLevel() == DEFAULT_LEVEL == logging.WARNING


def test_default_level_keeps_run_reports_quiet(capture):
    """At the default level a complete enumeration emits nothing."""
    exhaust(lambda g: g.gen(3))
    assert capture.getvalue() == ""


def test_truncation_warning_emitted_by_default(capture):
    exhaust(lambda g: g.gen(9), EnumerationConfig(max_runs=2))
    lines = capture.getvalue().splitlines()
    assert lines == [
        "WARNING|exhaustigen.runner|"
        "Stopping after max_runs=2 runs; enumeration is incomplete"
    ]


def test_info_level_reports_start_and_finish(capture):
    exhaust(lambda g: g.flip(), EnumerationConfig(log_level=logging.INFO))
    lines = capture.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith(
        "INFO|exhaustigen.runner|Starting exhaustive enumeration"
    )
    assert lines[1].startswith("INFO|exhaustigen.runner|Finished enumeration of")
    assert "2 runs, max depth 1" in lines[1]


def test_debug_level_reports_progress_and_gen_finish(capture):
    exhaust(
        lambda g: g.gen(3),
        EnumerationConfig(log_level=logging.DEBUG, progress_interval=2),
    )
    out = capture.getvalue()
    assert "DEBUG|exhaustigen.runner|Completed 2 runs (path depth 1)" in out
    assert "DEBUG|exhaustigen.runner|Completed 4 runs (path depth 1)" in out
    assert "DEBUG|exhaustigen.gen|Enumeration finished after 4 runs" in out


def test_log_level_restored_after_enumeration(capture):
    root = logging.getLogger(ROOT_LOGGER_NAME)
    exhaust(lambda g: g.flip(), EnumerationConfig(log_level=logging.DEBUG))
    assert root.level == DEFAULT_LEVEL


def test_log_level_restored_when_body_fails(capture):
    root = logging.getLogger(ROOT_LOGGER_NAME)

    def body(g):
        assert not g.flip()

    with pytest.raises(AssertionError):
        exhaust(body, EnumerationConfig(log_level=logging.DEBUG))
    assert root.level == DEFAULT_LEVEL


def test_set_level_returns_previous(capture):
    assert set_level(logging.ERROR) == DEFAULT_LEVEL
    assert set_level(DEFAULT_LEVEL) == logging.ERROR


def test_gen_finish_record_emitted_once(caplog):
    caplog.set_level(logging.DEBUG, logger="exhaustigen.gen")

    g = Gen()
    while not g.done():
        g.flip()
    assert g.done()

    finished = [
        r
        for r in caplog.records
        if r.name == "exhaustigen.gen" and "Enumeration finished" in r.message
    ]
    assert len(finished) == 1
    assert finished[0].levelno == logging.DEBUG
    assert "2 runs" in finished[0].message


def test_setup_is_idempotent(capture):
    root = logging.getLogger(ROOT_LOGGER_NAME)
    setup_root_logger(handler=logging.StreamHandler(StringIO()))
    assert len(root.handlers) == 1
