import io
import json
import logging

import pytest

from makit.core.config import LoggerConfig
from makit.utils.logging import ColouredFormatter
from makit.utils.logging import JSONFormatter
from makit.utils.logging import MakitFormatter
from makit.utils.logging import PathContext
from makit.utils.logging import PathFilter
from makit.utils.logging import configure
from makit.utils.logging import dehumanise
from makit.utils.logging import get_logger
from makit.utils.logging import perf_logger


def _record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord(
        "makit.test", level, __file__, 10, msg, None, None, func="handler"
    )
    record.__dict__.update(extra)
    return record


@pytest.mark.unit
class TestFormatters:
    def test_extra_fields(self):
        formatter = MakitFormatter(
            "%(extra)s|%(message)s", extra_format="[{key}: {value}]"
        )
        text = formatter.format(_record(target="a.txt", elapsed=0.5))
        assert text == "[elapsed: 0.5] [target: a.txt]|hello"

    def test_no_extra_fields(self):
        formatter = MakitFormatter("%(extra)s|%(qualName)s|%(message)s")
        assert formatter.format(_record()) == "|makit.test.handler|hello"

    def test_coloured_plain(self):
        formatter = ColouredFormatter("%(levelname)s %(qualName)s %(message)s")
        text = formatter.format(_record(level=logging.WARNING))
        assert text == " WARNING makit.test.handler hello"
        assert "\x1b[" not in text

    def test_coloured_tty(self):
        formatter = ColouredFormatter("%(levelname)s %(message)s")
        formatter.is_tty = True
        text = formatter.format(_record(level=logging.ERROR))
        assert text.startswith(ColouredFormatter.COLORS["ERROR"])
        assert ColouredFormatter.COLORS["RESET"] in text

    def test_json(self):
        payload = json.loads(JSONFormatter().format(_record(target="x")))
        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "makit.test"
        assert payload["function"] == "handler"
        assert payload["target"] == "x"
        assert "msecs" not in payload

    def test_json_without_extras(self):
        payload = json.loads(JSONFormatter(extras=False).format(_record(t=1)))
        assert "t" not in payload


@pytest.mark.unit
class TestPathContext:
    def test_nesting(self):
        assert PathContext.get_current() is None
        with PathContext("outer"):
            with PathContext("inner"):
                assert PathContext.get_current() == "inner"
            assert PathContext.get_current() == "outer"
        assert PathContext.get_current() is None

    def test_filter_tags_records(self):
        record = _record()
        with PathContext("logs/"):
            assert PathFilter().filter(record) is True
        assert record.target == "logs/"

    def test_filter_outside_context(self):
        record = _record()
        assert PathFilter().filter(record) is True
        assert not hasattr(record, "target")


@pytest.mark.unit
class TestDehumanise:
    @pytest.mark.parametrize(
        "size, expected",
        [
            ("10MB", 10 * 1024**2),
            ("1gb", 1024**3),
            ("512", 512),
            ("2 KB", 2048),
            ("1.5K", 1536),
        ],
    )
    def test_valid(self, size, expected):
        assert dehumanise(size) == expected

    @pytest.mark.parametrize("size", ["", "MB", "ten", "10XB"])
    def test_invalid(self, size):
        with pytest.raises(ValueError, match="Invalid size format"):
            dehumanise(size)


@pytest.mark.integration
class TestConfigure:
    def test_console_handler(self):
        stream = io.StringIO()
        config = LoggerConfig()
        config.tty.level = "INFO"
        configure(config, stream=stream)
        logger = get_logger("makit.core.materializer")
        logger.debug("hidden")
        with PathContext("a.txt"):
            logger.info("visible")
        output = stream.getvalue()
        assert "hidden" not in output
        assert "visible" in output
        assert "[target: a.txt]" in output
        assert "\x1b[" not in output

    def test_reconfigure_replaces_handlers(self):
        configure(LoggerConfig(), stream=io.StringIO())
        configure(LoggerConfig(), stream=io.StringIO())
        assert len(logging.getLogger("makit").handlers) == 1

    def test_json_output(self):
        stream = io.StringIO()
        config = LoggerConfig()
        config.as_json = True
        configure(config, stream=stream)
        get_logger("makit.cli").warning("careful")
        assert json.loads(stream.getvalue())["message"] == "careful"

    def test_file_handler(self, tmp_path):
        config = LoggerConfig()
        config.tty.enable = False
        config.file.enable = True
        config.file.path = str(tmp_path / "logs" / "makit.log")
        configure(config)
        get_logger("makit.cli").debug("to the file")
        for handler in logging.getLogger("makit").handlers:
            handler.flush()
        assert "to the file" in (tmp_path / "logs" / "makit.log").read_text()

    def test_disabled_handlers_fall_back_to_level(self):
        config = LoggerConfig()
        config.tty.enable = False
        config.level = "ERROR"
        configure(config)
        logger = logging.getLogger("makit")
        assert logger.handlers == []
        assert logger.level == logging.ERROR


@pytest.mark.unit
class TestPerfLogger:
    def test_success(self, caplog):
        @perf_logger
        def work():
            return 42

        with caplog.at_level(logging.DEBUG):
            assert work() == 42
        assert "completed in" in caplog.text
        assert work.__name__ == "work"

    def test_failure(self, caplog):
        @perf_logger
        def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            broken()
        assert "failed after" in caplog.text
        assert caplog.records[-1].levelno == logging.ERROR
