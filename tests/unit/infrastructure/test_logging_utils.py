import logging
import time

import pytest

from lrckaraoke.utils.logging import setup_logging, get_logger
from lrckaraoke.utils.performance import PerformanceMonitor, format_timings


def test_setup_logging_adds_file_handler(tmp_path):
    log_path = tmp_path / "logs" / "app.log"

    logger = setup_logging(level="INFO", log_file=log_path, verbose=False)

    handlers = [type(h) for h in logger.handlers]
    assert logging.FileHandler in handlers
    assert logging.StreamHandler in handlers
    assert log_path.parent.exists()
    for handler in logger.handlers:
        handler.close()


def test_setup_logging_verbose_formatter():
    logger = setup_logging(level="DEBUG", verbose=True)

    assert logger.level == logging.DEBUG
    formatters = [h.formatter for h in logger.handlers if h.formatter]
    assert any("%(asctime)s" in f._fmt for f in formatters)


def test_setup_logging_replaces_handlers():
    setup_logging()
    logger = setup_logging()

    assert len(logger.handlers) == 1


def test_get_logger_returns_named_logger():
    logger = get_logger("custom")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "custom"


def test_performance_monitor_records_duration(caplog):
    with caplog.at_level("INFO", logger="lrckaraoke"):
        with PerformanceMonitor("stage") as monitor:
            time.sleep(0.01)

    assert monitor.duration > 0
    assert "stage done" in caplog.text


def test_performance_monitor_fills_timings():
    timings = {}
    with PerformanceMonitor("audio download", timings):
        pass
    with PerformanceMonitor("video render", timings):
        pass

    assert list(timings) == ["audio download", "video render"]


def test_performance_monitor_records_failed_stage(caplog):
    timings = {}
    with caplog.at_level("INFO", logger="lrckaraoke"):
        with pytest.raises(ValueError):
            with PerformanceMonitor("stage", timings):
                raise ValueError("bad")

    assert "stage" in timings
    assert "stage failed" in caplog.text


def test_format_timings():
    summary = format_timings({"audio download": 1.5, "video render": 2.25})

    assert summary == "audio download 1.50s, video render 2.25s (total 3.75s)"
    assert format_timings({}) == "no stages timed"


def test_setup_logging_quiets_driven_libraries():
    setup_logging(level="DEBUG")

    for name in ("urllib3", "yt_dlp", "audio_separator"):
        assert logging.getLogger(name).level == logging.WARNING


def test_log_file_keeps_emoji(tmp_path):
    log_path = tmp_path / "run.log"
    logger = setup_logging(log_file=log_path)

    logger.info("✅ video render done")
    for handler in logger.handlers:
        handler.flush()

    assert "✅ video render done" in log_path.read_text(encoding="utf-8")
