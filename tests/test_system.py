import csv
import dataclasses
import logging

from photovary.kernel.image.buffer import PixelBuffer
from photovary.kernel.system.config import APP_CONFIG
from photovary.kernel.system.logging import ROOT_LOGGER, get_logger, setup_logging
from photovary.kernel.system.performance import time_function


def test_get_logger_names():
    assert get_logger().name == ROOT_LOGGER
    assert get_logger("perf").name == "photovary.perf"
    assert get_logger("photovary.services.export.service").name == "photovary.services.export.service"


def test_setup_logging_is_idempotent():
    first = setup_logging(logging.INFO)
    count = len(first.handlers)
    second = setup_logging(logging.DEBUG)
    assert first is second
    assert len(second.handlers) == count
    assert all(h.level == logging.DEBUG for h in second.handlers)
    setup_logging(logging.INFO)


def test_records_reach_current_stderr(capsys):
    setup_logging(logging.INFO)
    get_logger("tests").warning("highlight skipped")
    err = capsys.readouterr().err
    assert "WARNING" in err
    assert "photovary.tests: highlight skipped" in err


def test_time_function_writes_csv(tmp_path, monkeypatch):
    log_path = tmp_path / "perf" / "timings.csv"
    monkeypatch.setattr(
        "photovary.kernel.system.performance.APP_CONFIG",
        dataclasses.replace(APP_CONFIG, perf_log_path=str(log_path)),
    )

    @time_function
    def invert(buf):
        return buf.derive(255 - buf.pixels)

    buf = PixelBuffer.blank(3, 2, (10, 20, 30, 40))
    assert invert(buf).pixel(0, 0) == (245, 235, 225, 215)
    invert(buf)

    with open(log_path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["timestamp", "function", "duration_ms", "image_shape"]
    assert len(rows) == 3
    assert rows[1][1] == "invert"
    assert rows[1][3] == "(2, 3)"
