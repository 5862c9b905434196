from __future__ import annotations

import json
import logging
from logging.handlers import QueueHandler

from salvo.runtime.logging import (
    JsonFormatter,
    LoggingConfig,
    configure_logging,
    shutdown_logging,
)


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
        extra={"custom": 1},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.json.formatter"
    assert payload["fields"] == {"custom": 1}


def test_configure_logging_console_only_uses_direct_handler() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        configure_logging(LoggingConfig(level_name="debug", console_format="json"))
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG
    finally:
        shutdown_logging()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_configure_logging_with_file_routes_through_queue(tmp_path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    log_file = tmp_path / "nested" / "run.jsonl"
    try:
        configure_logging(LoggingConfig(level_name="INFO", file_path=str(log_file)))
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], QueueHandler)

        logging.getLogger("test.queue").warning("queued")
        shutdown_logging()

        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert any(line["msg"] == "queued" for line in lines)
    finally:
        shutdown_logging()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)



def test_json_formatter_ignores_attributes_added_by_text_formatter() -> None:
    logger = logging.getLogger("test.json.after.text")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="salvo %d",
        args=(3,),
        exc_info=None,
        extra={"shots": 3},
    )
    logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s").format(record)

    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "salvo 3"
    assert payload["fields"] == {"shots": 3}
