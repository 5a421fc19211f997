"""
test_utils.py
-------------
Unit tests for utils.py, config.py and logging_utils.py
"""

import dataclasses
import logging
import math
from pathlib import Path

import pytest

from diagramtree.config import (
    DEFAULT_CONFIG, DEFAULT_DIAGRAM_STYLE, LOGGER_NAME, CoreConfig,
)
from diagramtree.logging_utils import ColorFormatter, configure_logging
from diagramtree.utils import linspace, linspace_exc, range_inc, to_degree, to_radian


# ---------------------------------------------------------------------------
# 1. Numeric helpers
# ---------------------------------------------------------------------------

def test_angle_conversion():
    assert to_radian(180) == pytest.approx(math.pi)
    assert to_degree(math.pi / 2) == pytest.approx(90)


def test_linspace_inclusive_and_exclusive():
    assert linspace(0, 1, 5) == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert linspace_exc(0, 1, 4) == [0.0, 0.25, 0.5, 0.75]
    assert len(linspace(0, 1)) == 100
    with pytest.raises(ValueError):
        linspace(0, 1, 0)


def test_range_inc():
    assert range_inc(0, 1, 0.25) == pytest.approx([0, 0.25, 0.5, 0.75, 1.0])
    assert range_inc(1, 4) == [1, 2, 3, 4]
    assert range_inc(3, 0, -1) == [3, 2, 1, 0]
    assert range_inc(5, 0) == []
    with pytest.raises(ValueError):
        range_inc(0, 1, 0)


# ---------------------------------------------------------------------------
# 2. Configuration
# ---------------------------------------------------------------------------

def test_default_config():
    assert DEFAULT_CONFIG.linespace == "1em"
    assert DEFAULT_CONFIG.text_scale_factor == 1.0
    assert DEFAULT_CONFIG.log_dir is None


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.linespace = "2em"
    with pytest.raises(TypeError):
        DEFAULT_DIAGRAM_STYLE["fill"] = "red"


def test_config_validation(tmp_path):
    with pytest.raises(ValueError):
        CoreConfig(text_scale_factor=0)
    cfg = CoreConfig(log_dir=str(tmp_path))
    assert cfg.log_dir == tmp_path


# ---------------------------------------------------------------------------
# 3. Logging
# ---------------------------------------------------------------------------

@pytest.fixture
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    for h in handlers:
        logger.addHandler(h)
    logger.setLevel(level)


def test_console_only_logging(restore_logger):
    assert configure_logging(logging.DEBUG) is None
    assert len(restore_logger.handlers) == 1
    assert restore_logger.level == logging.DEBUG


def test_file_logging(restore_logger, tmp_path):
    log_path = configure_logging(logging.INFO, log_dir=tmp_path / "logs", run_prefix="test")
    assert isinstance(log_path, Path)
    assert log_path.parent == tmp_path / "logs"
    assert log_path.name.startswith("test_PID")

    restore_logger.warning("written to file")
    for h in restore_logger.handlers:
        h.flush()
    assert "written to file" in log_path.read_text()


def test_reconfigure_replaces_handlers(restore_logger):
    configure_logging()
    configure_logging()
    assert len(restore_logger.handlers) == 1


def test_color_formatter_includes_level_and_name():
    record = logging.LogRecord(LOGGER_NAME, logging.WARNING, __file__, 1, "hi %s", ("there",), None)
    line = ColorFormatter(datefmt="%H:%M:%S").format(record)
    assert "WARNING" in line
    assert "[diagramtree]" in line
    assert line.endswith("hi there")


def test_config_drives_logging_defaults(restore_logger, tmp_path):
    config = CoreConfig(logger_level=logging.DEBUG, log_dir=tmp_path / "cfg")
    log_path = configure_logging(config=config)
    assert restore_logger.level == logging.DEBUG
    assert log_path.parent == tmp_path / "cfg"
    assert len(restore_logger.handlers) == 2

    assert configure_logging(logging.WARNING, config=config).parent == tmp_path / "cfg"
    assert restore_logger.level == logging.WARNING
