"""Unit tests for structured logging helpers."""
from __future__ import annotations

import json
import logging
import sys

import pytest

import starwars_service.infra.logging.config as logging_config
from starwars_service.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    configure_logging,
    get_lazy_logger,
    get_log_context,
    remove_from_log_context,
    set_log_context,
    shutdown,
)


def make_record(msg: str = "Resolving droid", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="starwars_service.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.mark.unit
class TestLogContext:
    def test_set_and_get(self):
        set_log_context(correlation_id="abc-123")
        set_log_context(operation_name="GetDroid")

        assert get_log_context() == {"correlation_id": "abc-123", "operation_name": "GetDroid"}

    def test_get_returns_copy(self):
        set_log_context(correlation_id="abc-123")
        get_log_context()["correlation_id"] = "changed"

        assert get_log_context()["correlation_id"] == "abc-123"

    def test_remove_and_clear(self):
        set_log_context(correlation_id="abc-123", operation_name="GetDroid")

        remove_from_log_context("operation_name", "missing")
        assert get_log_context() == {"correlation_id": "abc-123"}

        clear_log_context()
        assert get_log_context() == {}

    def test_filter_injects_context(self):
        set_log_context(correlation_id="abc-123")
        record = make_record()

        assert ContextInjectingFilter().filter(record) is True
        assert record.correlation_id == "abc-123"

    def test_filter_does_not_overwrite_record_attributes(self):
        set_log_context(loader="characters")
        record = make_record(loader="droids")

        ContextInjectingFilter().filter(record)

        assert record.loader == "droids"


@pytest.mark.unit
class TestJSONFormatter:
    def test_one_json_object_per_record(self):
        formatter = JSONFormatter(static={"service": "starwars-service"})

        payload = json.loads(formatter.format(make_record(batch_size=3)))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "starwars_service.test"
        assert payload["message"] == "Resolving droid"
        assert payload["service"] == "starwars-service"
        assert payload["batch_size"] == 3
        assert payload["timestamp"].endswith("Z")
        assert "trace_id" not in payload

    def test_exception_stays_on_one_line(self):
        try:
            msg = "boom"
            raise RuntimeError(msg)
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()

        output = JSONFormatter().format(record)

        assert "\n" not in output
        assert "RuntimeError: boom" in json.loads(output)["exception"]

    def test_non_serializable_extra_uses_str(self):
        payload = json.loads(JSONFormatter().format(make_record(key=object)))

        assert payload["key"] == str(object)


@pytest.mark.unit
class TestLazyLogger:
    def test_callables_evaluated_when_enabled(self, caplog):
        logger = get_lazy_logger("starwars_service.test.lazy")

        with caplog.at_level(logging.DEBUG, logger="starwars_service.test.lazy"):
            logger.debug(lambda: "Dispatching keys [1, 2]")
            logger.debug("Resolved %s", lambda: 2)

        assert [r.getMessage() for r in caplog.records] == [
            "Dispatching keys [1, 2]",
            "Resolved 2",
        ]

    def test_callables_skipped_when_disabled(self, caplog):
        logger = get_lazy_logger("starwars_service.test.lazy")
        calls = []

        def expensive() -> str:
            calls.append(1)
            return "never"

        with caplog.at_level(logging.WARNING, logger="starwars_service.test.lazy"):
            logger.debug(expensive)

        assert calls == []
        assert caplog.records == []

    def test_bound_context_added_to_records(self, caplog):
        logger = get_lazy_logger("starwars_service.test.lazy", loader="droids")

        with caplog.at_level(logging.INFO, logger="starwars_service.test.lazy"):
            logger.info("Batch dispatched")

        assert caplog.records[0].loader == "droids"


@pytest.mark.unit
class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        level = logging.getLogger().level
        yield
        shutdown()
        logging.getLogger().setLevel(level)

    def test_reconfiguring_registers_shutdown_once(self, tmp_path, monkeypatch):
        registered = []
        monkeypatch.setattr(logging_config.atexit, "register", registered.append)
        monkeypatch.setattr(logging_config, "_SHUTDOWN_REGISTERED", False)

        for _ in range(3):
            configure_logging(
                log_level="INFO",
                file_path=tmp_path / "app.jsonl",
                console_enabled=False,
                capture_warnings=False,
            )

        assert registered == [shutdown]

    def test_json_lines_with_context_written_to_file(self, tmp_path):
        log_file = tmp_path / "logs" / "app.jsonl"
        configure_logging(
            log_level="INFO",
            file_path=log_file,
            console_enabled=False,
            capture_warnings=False,
            service_name="starwars-service",
        )
        set_log_context(correlation_id="req-42")
        try:
            logging.getLogger("starwars_service.test.file").info(
                "Batch dispatched", extra={"batch_size": 3}
            )
        finally:
            shutdown()

        payload = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert payload["message"] == "Batch dispatched"
        assert payload["service"] == "starwars-service"
        assert payload["correlation_id"] == "req-42"
        assert payload["batch_size"] == 3

    def test_level_filters_records(self, tmp_path):
        log_file = tmp_path / "app.jsonl"
        configure_logging(
            log_level="WARNING",
            file_path=log_file,
            console_enabled=False,
            capture_warnings=False,
        )
        try:
            logging.getLogger("starwars_service.test.file").info("not written")
            logging.getLogger("starwars_service.test.file").warning("written")
        finally:
            shutdown()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["message"] for line in lines] == ["written"]
