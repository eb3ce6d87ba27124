"""
🧪 test_logger.py: unit-тести для init_logging / JsonFormatter

Перевіряє:
- Повторна ініціалізація замінює хендлери, а не дублює їх
- `file=None` вимикає файловий хендлер
- JSON-формат файлу містить extra-поля
- Приглушення сторонніх логерів (httpx)
"""

import json
import logging
from decimal import Decimal

import pytest

from checkout_engine.shared.utils.logger import (
    LOG_NAME,
    JsonFormatter,
    get_logger,
    init_logging,
    init_logging_from_config,
)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    root = logging.getLogger(LOG_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def test_reinit_does_not_duplicate_handlers():
    init_logging(console=True, file=None)
    init_logging(console=True, file=None)
    assert len(logging.getLogger(LOG_NAME).handlers) == 1


def test_file_none_disables_file_handler():
    root = init_logging(console=False, file=None)
    assert root.handlers == []


def test_json_file_contains_extra(tmp_path):
    log_file = tmp_path / "logs" / "engine.log"
    init_logging(level="DEBUG", console=False, json_mode=True, file=str(log_file))
    get_logger("tests").info("quote accepted", extra={"quote_seq": 7, "amount": Decimal("2.500")})
    for handler in logging.getLogger(LOG_NAME).handlers:
        handler.flush()

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    record = next(line for line in lines if line["message"] == "quote accepted")
    assert record["name"] == f"{LOG_NAME}.tests"
    assert record["quote_seq"] == 7
    assert record["amount"] == "2.500"


def test_third_party_loggers_are_suppressed():
    init_logging(console=False, file=None, suppress={"httpx": "ERROR"})
    assert logging.getLogger("httpx").level == logging.ERROR


def test_init_from_config_node():
    root = init_logging_from_config({"level": "WARNING", "console": True, "file": None})
    assert root.level == logging.WARNING
    assert all(not isinstance(h, logging.FileHandler) for h in root.handlers)


def test_json_formatter_without_extras():
    record = logging.LogRecord(LOG_NAME, logging.INFO, __file__, 10, "hello %s", ("world",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"


def test_get_logger_names():
    assert get_logger().name == LOG_NAME
    assert get_logger("domain.pricing").name == f"{LOG_NAME}.domain.pricing"
