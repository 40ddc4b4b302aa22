import logging
from unittest.mock import Mock
from unittest.mock import patch

import pytest

from stream_urls.config import Config
from stream_urls.logging_config import FORMAT_PLAIN
from stream_urls.logging_config import FORMAT_WITH_STREAM_ID
from stream_urls.logging_config import NO_STREAM_ID
from stream_urls.logging_config import StreamIDFilter
from stream_urls.logging_config import new_stream_id
from stream_urls.logging_config import setup_logging
from stream_urls.logging_config import stream_id_context
from stream_urls.logging_config import stream_id_scope


@pytest.fixture
def config():
    return Config(log_level="info", loki_enabled=False, loki_url="", environment="test")


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=10,
        msg="Test message",
        args=(),
        exc_info=None,
    )


def test_stream_id_filter_adds_default_when_missing():
    record = _record()

    assert StreamIDFilter().filter(record) is True
    assert record.stream_id == NO_STREAM_ID


def test_stream_id_filter_preserves_existing_stream_id():
    record = _record()
    record.stream_id = "a1b2c3d4e5f67890"

    assert StreamIDFilter().filter(record) is True
    assert record.stream_id == "a1b2c3d4e5f67890"


def test_new_stream_id_is_16_hex_chars():
    stream_id = new_stream_id()

    assert len(stream_id) == 16
    assert int(stream_id, 16) >= 0
    assert stream_id_context.get() == NO_STREAM_ID


def test_stream_id_scope_tags_records_and_restores_previous_id():
    with stream_id_scope() as stream_id:
        record = _record()
        StreamIDFilter().filter(record)
        assert record.stream_id == stream_id

    after = _record()
    StreamIDFilter().filter(after)
    assert after.stream_id == NO_STREAM_ID


def test_stream_id_scopes_nest():
    with stream_id_scope("outer"):
        with stream_id_scope("inner"):
            assert stream_id_context.get() == "inner"
        assert stream_id_context.get() == "outer"
    assert stream_id_context.get() == NO_STREAM_ID


def test_stream_id_scope_resets_on_error():
    with pytest.raises(RuntimeError):
        with stream_id_scope("failing"):
            raise RuntimeError("boom")

    assert stream_id_context.get() == NO_STREAM_ID


def test_stream_id_filter_works_with_extra():
    logger = logging.getLogger("test_stream_filter_extra_logger")
    logger.setLevel(logging.INFO)

    log_records = []

    class RecordCapture(logging.Handler):
        def emit(self, record):
            log_records.append(record)

    capture_handler = RecordCapture()
    capture_handler.addFilter(StreamIDFilter())
    logger.addHandler(capture_handler)

    with stream_id_scope("from-context"):
        logger.info("Test message", extra={"stream_id": "a1b2c3d4e5f67890"})

    assert len(log_records) == 1
    assert log_records[0].stream_id == "a1b2c3d4e5f67890"

    logger.handlers.clear()


def test_setup_logging_defaults_to_package_logger(config):
    with patch("stream_urls.logging_config.logging.basicConfig"):
        logger = setup_logging(config)

    assert isinstance(logger, logging.Logger)
    assert logger.name == "stream_urls"


def test_setup_logging_reads_config_when_omitted():
    with patch("stream_urls.logging_config.get_config") as get_config, patch(
        "stream_urls.logging_config.logging.basicConfig"
    ) as basic_config:
        get_config.return_value = Config(log_level="WARNING", loki_enabled=False, loki_url="", environment="x")
        setup_logging(service_name="svc")

    get_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == logging.WARNING


def test_setup_logging_without_loki(config):
    with patch("stream_urls.logging_config.LokiLoggerHandler") as loki, patch(
        "stream_urls.logging_config.logging.basicConfig"
    ) as basic_config:
        setup_logging(config, "test_service")

    loki.assert_not_called()
    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.INFO
    assert kwargs["format"] == FORMAT_WITH_STREAM_ID
    assert len(kwargs["handlers"]) == 1
    assert any(isinstance(f, StreamIDFilter) for f in kwargs["handlers"][0].filters)


def test_setup_logging_without_stream_id(config):
    with patch("stream_urls.logging_config.logging.basicConfig") as basic_config:
        setup_logging(config, "test_service", include_stream_id=False)

    kwargs = basic_config.call_args.kwargs
    assert kwargs["format"] == FORMAT_PLAIN
    assert not kwargs["handlers"][0].filters


def test_setup_logging_with_loki(config):
    config.loki_enabled = True
    config.loki_url = "http://loki:3100/loki/api/v1/push"

    with patch("stream_urls.logging_config.LokiLoggerHandler") as loki, patch(
        "stream_urls.logging_config.logging.basicConfig"
    ) as basic_config:
        loki.return_value = Mock(spec=logging.Handler)
        setup_logging(config, "test_service")

    loki.assert_called_once()
    labels = loki.call_args.kwargs["labels"]
    assert labels["service"] == "test_service"
    assert labels["package"] == "stream_urls"
    assert labels["environment"] == "test"
    handlers = basic_config.call_args.kwargs["handlers"]
    assert loki.return_value in handlers
    loki.return_value.addFilter.assert_called_once()
