import io
import logging
import re
import sys
from datetime import datetime

import pytest

from geometry.config import DEFAULT_LOG_PATH
from geometry.loggers import (
    ConsoleLogger,
    FileLogger,
    RecordingLogger,
    StandardLogger,
    format_line,
)
from geometry.shapes import Circle, Triangle

FILE_LINE = re.compile(r"^\[LOG\] \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}: (?P<message>.*)$")
CONSOLE_LINE = re.compile(r"^\[LOG\] \d{2}:\d{2}:\d{2}: (?P<message>.*)$")


class BrokenStream:
    """書き込みのたびに OSError を送出するストリーム。"""

    def write(self, text):
        raise OSError("disk full")

    def flush(self):
        pass

    def close(self):
        pass


@pytest.mark.group_logger
def test_console_logger_format(capsys):
    ConsoleLogger().log_info("hello")
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 1
    assert CONSOLE_LINE.match(out[0]).group("message") == "hello"


@pytest.mark.group_logger
def test_file_logger_appends_lines(tmp_path):
    path = tmp_path / "geometry.log"
    path.write_text("existing\n", encoding="utf-8")

    with FileLogger(str(path)) as log:
        Triangle(3, 4, 5, log).calculate_perimeter()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "existing"
    messages = [FILE_LINE.match(line).group("message") for line in lines[1:]]
    assert messages == [
        "Created shape: Triangle",
        "Triangle created: a=3.00, b=4.00, c=5.00",
        "Perimeter computed: 12.00",
    ]


@pytest.mark.group_logger
def test_file_logger_flushes_each_call(tmp_path):
    path = tmp_path / "geometry.log"
    log = FileLogger(str(path))
    try:
        log.log_info("first")
        assert FILE_LINE.match(path.read_text(encoding="utf-8").strip())
    finally:
        log.close()


@pytest.mark.group_logger
def test_file_logger_close_is_idempotent(tmp_path):
    log = FileLogger(str(tmp_path / "geometry.log"))
    log.close()
    log.close()
    assert log.closed


@pytest.mark.group_logger
def test_closed_file_logger_does_not_raise(tmp_path, caplog):
    path = tmp_path / "geometry.log"
    log = FileLogger(str(path))
    log.close()

    with caplog.at_level(logging.WARNING, logger="geometry.loggers"):
        circle = Circle(2, log)
        assert circle.calculate_area() == pytest.approx(4 * 3.141592653589793)

    assert path.read_text(encoding="utf-8") == ""
    assert "is closed" in caplog.text


@pytest.mark.group_logger
def test_write_failure_does_not_reach_shape(tmp_path, monkeypatch, caplog):
    log = FileLogger(str(tmp_path / "geometry.log"))
    real_stream = log._stream
    monkeypatch.setattr(log, "_stream", BrokenStream())

    with caplog.at_level(logging.WARNING, logger="geometry.loggers"):
        triangle = Triangle(5, 12, 13, log)
        assert triangle.calculate_area() == pytest.approx(30.0)

    assert "disk full" in caplog.text
    real_stream.close()


@pytest.mark.group_logger
def test_unencodable_message_does_not_reach_shape(tmp_path, caplog):
    path = tmp_path / "geometry.log"

    with caplog.at_level(logging.WARNING, logger="geometry.loggers"):
        with FileLogger(str(path)) as log:
            triangle = Triangle(3, 4, 5, log, name="bad\udc80name")
            assert triangle.calculate_perimeter() == 12

    assert "Failed to write" in caplog.text
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [FILE_LINE.match(line).group("message") for line in lines] == [
        "Triangle created: a=3.00, b=4.00, c=5.00",
        "Perimeter computed: 12.00",
    ]


@pytest.mark.group_logger
def test_closed_stdout_does_not_reach_shape(monkeypatch, caplog):
    closed = io.StringIO()
    closed.close()
    monkeypatch.setattr(sys, "stdout", closed)

    with caplog.at_level(logging.WARNING, logger="geometry.loggers"):
        circle = Circle(2, ConsoleLogger())
        assert circle.calculate_area() == pytest.approx(4 * 3.141592653589793)

    assert "Failed to write to stdout" in caplog.text


@pytest.mark.group_logger
def test_standard_logger_forwards(caplog):
    with caplog.at_level(logging.INFO, logger="geometry.shapes"):
        Circle(1, StandardLogger())
    assert "Circle created: radius=1.00" in caplog.messages


@pytest.mark.group_logger
def test_recording_logger():
    log = RecordingLogger()
    log.log_info("a")
    log.log_info("b")
    assert log.messages == ["a", "b"]
    log.clear()
    assert log.messages == []


@pytest.mark.group_logger
def test_format_line_uses_given_time():
    now = datetime(2024, 1, 2, 3, 4, 5)
    assert format_line("msg", "%Y-%m-%d %H:%M:%S", now) == "[LOG] 2024-01-02 03:04:05: msg"


@pytest.mark.group_logger
def test_default_log_path():
    assert DEFAULT_LOG_PATH == "geometry.log"
