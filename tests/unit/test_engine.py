"""
Unit tests for the VibeLogger engine
"""

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from vibelogger import LogLevel, VibeLogger, create_logger


def test_basic_logging(memory_logger):
    entry = memory_logger.info(
        "test_operation", "Test message", context={"key": "value"}
    )

    assert entry.level == "INFO"
    assert entry.operation == "test_operation"
    assert entry.message == "Test message"
    assert entry.context == {"key": "value"}
    assert len(memory_logger.get_logs()) == 1


def test_all_levels_in_call_order(memory_logger):
    memory_logger.debug("op", "debug msg")
    memory_logger.info("op", "info msg")
    memory_logger.warning("op", "warning msg")
    memory_logger.error("op", "error msg")
    memory_logger.critical("op", "critical msg")

    levels = [e.level for e in memory_logger.get_logs()]
    assert levels == ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def test_log_accepts_level_names_and_numbers(memory_logger):
    assert memory_logger.log("warning", "op", "msg").level == "WARNING"
    assert memory_logger.log(40, "op", "msg").level == "ERROR"
    assert memory_logger.log(LogLevel.CRITICAL, "op", "msg").level == "CRITICAL"


def test_log_exception_with_exception(memory_logger):
    try:
        raise ValueError("Test error")
    except ValueError as e:
        entry = memory_logger.log_exception(
            "test_exception", e, context={"error_context": "test"}
        )

    assert entry.level == "ERROR"
    assert entry.message == "ValueError: Test error"
    assert entry.stack_trace is not None
    assert "ValueError" in entry.stack_trace
    assert entry.context["error_context"] == "test"
    assert entry.context["error_type"] == "ValueError"
    assert entry.context["original_error"]["message"] == "Test error"


@pytest.mark.parametrize(
    "error",
    [
        RuntimeError("Standard Error"),
        "String error",
        42,
        {"customError": "Object error"},
        None,
    ],
)
def test_log_exception_with_any_value(memory_logger, error):
    entry = memory_logger.log_exception("error_op", error)

    assert entry.level == "ERROR"
    assert entry.message
    assert entry.context["error_type"]
    assert entry.context["original_error"] is not None


def test_log_exception_without_error_value(memory_logger):
    entry = memory_logger.log_exception("error_op")

    assert entry.level == "ERROR"
    assert entry.message == "UnknownError: no error value provided"
    assert entry.context["error_type"] == "NoValue"
    assert entry.context["original_error"]


def test_log_exception_at_other_level(memory_logger):
    entry = memory_logger.log_exception(
        "cache_lookup", KeyError("user:42"), level=LogLevel.WARNING
    )

    assert entry.level == "WARNING"
    assert entry.context["error_type"] == "KeyError"


def test_six_error_shapes_all_buffered(memory_logger):
    errors = [Exception("e"), "s", 42, {"k": "v"}, None]
    for i, error in enumerate(errors):
        memory_logger.log_exception(f"error_type_{i}", error)
    memory_logger.log_exception("error_type_5")

    logs = memory_logger.get_logs()
    assert len(logs) == 6
    assert all(log.level == "ERROR" for log in logs)


def test_bounded_buffer_keeps_most_recent():
    logger = VibeLogger(
        {"keep_logs_in_memory": True, "max_memory_logs": 3, "auto_save": False}
    )
    for i in range(5):
        logger.info("test_op", f"Message {i}")

    assert [e.message for e in logger.get_logs()] == [
        "Message 2",
        "Message 3",
        "Message 4",
    ]


def test_large_volume_eviction():
    logger = VibeLogger({"max_memory_logs": 100, "auto_save": False})
    for i in range(500):
        logger.info("memory_test", f"Log {i}", context={"iteration": i})

    logs = logger.get_logs()
    assert len(logs) == 100
    assert logs[0].context["iteration"] == 400
    assert logs[-1].context["iteration"] == 499


def test_memory_disabled():
    logger = VibeLogger({"keep_logs_in_memory": False, "auto_save": False})
    for i in range(10):
        entry = logger.info("test_op", f"Message {i}")
        assert entry.message == f"Message {i}"

    assert logger.get_logs() == []
    assert json.loads(logger.get_logs_for_ai()) == []


def test_get_logs_returns_copy(memory_logger):
    memory_logger.info("op", "one")
    logs = memory_logger.get_logs()
    logs.clear()
    assert len(memory_logger.get_logs()) == 1


def test_clear_logs(memory_logger):
    memory_logger.info("test_op", "Message 1")
    memory_logger.info("test_op", "Message 2")
    assert len(memory_logger.get_logs()) == 2

    memory_logger.clear_logs()
    assert memory_logger.get_logs() == []


class TestCorrelationId:
    def test_explicit_id_is_echoed(self):
        logger = VibeLogger({"correlation_id": "test-correlation-123"})
        entry = logger.info("test_op", "Test message")

        assert logger.get_correlation_id() == "test-correlation-123"
        assert entry.correlation_id == "test-correlation-123"

    def test_empty_id_generates_one(self):
        logger = VibeLogger({"correlation_id": ""})
        assert logger.get_correlation_id()

    def test_generated_ids_do_not_collide(self):
        ids = {VibeLogger().get_correlation_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_per_call_override(self, memory_logger):
        entry = memory_logger.info("op", "msg", correlation_id="request-7")
        assert entry.correlation_id == "request-7"

        entry = memory_logger.info("op", "msg", correlation_id="")
        assert entry.correlation_id == memory_logger.get_correlation_id()


def test_human_annotations(memory_logger):
    entry = memory_logger.info(
        "test_op",
        "Test message",
        human_note="This is a note for AI",
        ai_todo="Please analyze this specific issue",
    )

    assert entry.human_note == "This is a note for AI"
    assert entry.ai_todo == "Please analyze this specific issue"


def test_get_logs_for_ai(memory_logger):
    memory_logger.info("operation1", "Message 1")
    memory_logger.error("operation2", "Message 2")

    parsed = json.loads(memory_logger.get_logs_for_ai())

    assert [p["operation"] for p in parsed] == ["operation1", "operation2"]
    assert parsed[1]["level"] == "ERROR"
    assert "environment" in parsed[0]


def test_get_logs_for_ai_filter(memory_logger):
    memory_logger.info("fetch_user", "Message 1")
    memory_logger.info("save_data", "Message 2")
    memory_logger.info("fetch_user", "Message 3")

    parsed = json.loads(memory_logger.get_logs_for_ai("fetch_user"))

    assert len(parsed) == 2
    assert all("fetch_user" in p["operation"] for p in parsed)
    assert [p["message"] for p in parsed] == ["Message 1", "Message 3"]


def test_entries_carry_source_and_environment(memory_logger):
    entry = memory_logger.info("env_test", "Testing environment info")

    assert entry.environment.os
    assert entry.environment.architecture
    assert entry.environment.runtime_version
    assert entry.source is not None
    assert "test_engine.py" in entry.source


def test_utc_timestamp(memory_logger):
    entry = memory_logger.info("test_op", "Test message")
    assert entry.timestamp.endswith("+00:00") or entry.timestamp.endswith("Z")


def test_timestamps_non_decreasing(memory_logger):
    for i in range(20):
        memory_logger.info("op", str(i))
    stamps = [e.timestamp for e in memory_logger.get_logs()]
    assert stamps == sorted(stamps)


def test_malformed_context_does_not_crash(memory_logger):
    cyclic = {"name": "loop"}
    cyclic["self"] = cyclic
    contexts = [
        {"function": lambda: "not serializable"},
        {"large_data": "x" * 100000},
        {"nested": {"very": {"deep": {"nesting": {"structure": "value"}}}}},
        {"unicode": "🚀🎉💻🔥"},
        {"none_value": None},
        {"empty_dict": {}},
        {"empty_list": []},
        {"cycle": cyclic},
        {"obj": object()},
    ]
    for i, context in enumerate(contexts):
        entry = memory_logger.info(f"context_test_{i}", "ctx", context=context)
        json.dumps(entry.context)

    assert len(memory_logger.get_logs()) == len(contexts)


def test_invalid_config_falls_back_to_defaults():
    logger = VibeLogger({"max_memory_logs": "lots", "auto_save": False})
    assert logger.config.max_memory_logs == 1000
    assert logger.info("op", "still works").operation == "op"


def test_create_logger_overrides():
    logger = create_logger({"auto_save": False}, max_memory_logs=2)
    for i in range(3):
        logger.info("op", str(i))
    assert [e.message for e in logger.get_logs()] == ["1", "2"]


class TestConcurrency:
    def test_concurrent_threads(self):
        logger = VibeLogger({"max_memory_logs": 1000, "auto_save": False})

        def work(worker_id):
            for i in range(10):
                logger.info(
                    f"worker_{worker_id}",
                    f"Message {i}",
                    context={"worker": worker_id, "iteration": i},
                )

        with ThreadPoolExecutor(max_workers=5) as pool:
            list(pool.map(work, range(5)))

        logs = logger.get_logs()
        assert len(logs) == 50
        assert {log.context["worker"] for log in logs} == set(range(5))
        seen = {(log.context["worker"], log.context["iteration"]) for log in logs}
        assert len(seen) == 50

    def test_concurrent_eviction_stays_bounded(self):
        logger = VibeLogger({"max_memory_logs": 25, "auto_save": False})

        def work(worker_id):
            for i in range(40):
                logger.info("op", f"{worker_id}-{i}")

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(work, range(8)))

        logs = logger.get_logs()
        assert len(logs) == 25
        assert len({e.message for e in logs}) == 25

    @pytest.mark.asyncio
    async def test_concurrent_asyncio_tasks(self):
        logger = VibeLogger({"max_memory_logs": 1000, "auto_save": False})

        await asyncio.gather(
            *(
                asyncio.to_thread(
                    logger.info,
                    f"worker_{w}",
                    f"Message {i}",
                    context={"worker": w, "iteration": i},
                )
                for w in range(5)
                for i in range(10)
            )
        )

        logs = logger.get_logs()
        assert len(logs) == 50
        assert {log.context["worker"] for log in logs} == set(range(5))
