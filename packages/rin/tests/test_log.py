"""Tests for configure_logging."""

import io
import logging

import pytest
from rin.log import configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_writes_pipe_separated_lines():
    stream = io.StringIO()
    configure_logging("info", stream=stream)

    logging.getLogger("rin.test").info("hello")

    line = stream.getvalue().strip()
    assert line.endswith("| INFO     | rin.test | hello")


def test_level_filters_messages():
    stream = io.StringIO()
    configure_logging(logging.WARNING, stream=stream)

    logging.getLogger("rin.test").info("quiet")
    logging.getLogger("rin.test").warning("loud")

    output = stream.getvalue()
    assert "quiet" not in output
    assert "loud" in output


def test_unknown_level_name_falls_back_to_info():
    stream = io.StringIO()
    configure_logging("chatty", stream=stream)
    assert logging.getLogger().level == logging.INFO
