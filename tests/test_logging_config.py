from __future__ import annotations

import json
import logging
import logging.handlers
from pathlib import Path

from committer.logging_config import (
    HumanReadableFormatter,
    JSONFormatter,
    get_log_format_from_env,
    get_log_level_from_env,
    get_logger,
    setup_logging,
)


def test_setup_logging_writes_json_file(tmp_path: Path, reset_root_logging) -> None:
    """Logging setup adds JSON console output and a rotating file handler."""
    log_path = tmp_path / "logs" / "committer.log"
    setup_logging(
        level=logging.DEBUG,
        format_type="json",
        log_file=log_path,
        include_context=True,
    )
    handlers = list(reset_root_logging.handlers)
    file_handler = next(
        handler
        for handler in handlers
        if isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    console_handler = next(
        handler for handler in handlers if handler is not file_handler
    )

    assert isinstance(console_handler.formatter, JSONFormatter)
    assert isinstance(file_handler.formatter, JSONFormatter)
    logging.getLogger("committer.test").info("hello test", extra={"reference": "doc1"})

    file_handler.flush()
    records = [
        json.loads(line)
        for line in log_path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]
    record = next(r for r in records if r.get("message") == "hello test")
    assert record["reference"] == "doc1"
    assert record["level"] == "INFO"
    assert record["timestamp"].endswith("Z")


def test_setup_logging_human_format(reset_root_logging) -> None:
    setup_logging(level=logging.WARNING, format_type="human")
    (handler,) = reset_root_logging.handlers
    assert isinstance(handler.formatter, HumanReadableFormatter)
    assert reset_root_logging.level == logging.WARNING


def test_log_level_from_env(monkeypatch) -> None:
    monkeypatch.setenv("COMMITTER_LOG_LEVEL", "debug")
    assert get_log_level_from_env() == logging.DEBUG

    monkeypatch.delenv("COMMITTER_LOG_LEVEL")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert get_log_level_from_env() == logging.ERROR

    monkeypatch.setenv("LOG_LEVEL", "nonsense")
    assert get_log_level_from_env() == logging.INFO


def test_log_format_from_env(monkeypatch) -> None:
    monkeypatch.delenv("COMMITTER_LOG_FORMAT", raising=False)
    assert get_log_format_from_env() == "human"
    monkeypatch.setenv("COMMITTER_LOG_FORMAT", "JSON")
    assert get_log_format_from_env() == "json"


def test_get_logger_with_extra_returns_adapter() -> None:
    adapter = get_logger("committer.impl", extra={"committer": "MultipleCommitters"})
    assert isinstance(adapter, logging.LoggerAdapter)
    assert adapter.extra == {"committer": "MultipleCommitters"}
    assert isinstance(get_logger("committer.impl"), logging.Logger)
