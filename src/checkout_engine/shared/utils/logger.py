# 📜 checkout_engine/shared/utils/logger.py
"""
📜 Єдина схема логування для ядра checkout-розрахунків.

🔹 Усі модулі пишуть у дочірні логери з префіксом `LOG_NAME`.
🔹 Консоль + опційний файл із ротацією, JSON-формат для файлу на вимогу.
🔹 Шумні сторонні логери (`httpx`, `httpcore`) приглушуються через `suppress`.
"""
from __future__ import annotations

# 🔠 Системні імпорти
import json									# 📦 Серіалізація payload логів
import logging									# 🪵 Робота з логерами Python
import sys									# 🧵 Потік stdout
import threading								# 🧵 Захист повторної ініціалізації
from dataclasses import dataclass, field					# 🧱 DTO-конфіг логування
from logging.handlers import TimedRotatingFileHandler			# 📁 Файл із ротацією
from pathlib import Path								# 📂 Шляхи до лог-файлів
from typing import Any, Dict, Optional, Union				# 🧰 Типізація

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "checkout_engine"						# 🏷️ Кореневий префікс логерів пакета
PLAIN_FORMAT: str = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"
CONSOLE_FORMAT: str = "[%(levelname).1s] %(name)s: %(message)s"
DEFAULT_LOG_FILE: str = "logs/checkout_engine.log"

_RESERVED_RECORD_KEYS = frozenset(
    {
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "levelno", "lineno", "module", "msecs", "message", "msg", "name",
        "pathname", "process", "processName", "relativeCreated", "stack_info",
        "thread", "threadName", "levelname", "funcName", "taskName",
    }
)

_lock = threading.Lock()							# 🔒 Одна ініціалізація за раз


# ================================
# 🧾 DTO КОНФІГУРАЦІЇ
# ================================
@dataclass
class LoggingConfig:
    """Налаштування логування; значення за замовчуванням придатні для тестів і CLI."""
    level: str = "INFO"
    console: bool = True
    json: bool = False
    file: Optional[str] = DEFAULT_LOG_FILE				# 📁 None → файловий хендлер не створюється
    when: str = "midnight"
    interval: int = 1
    backup_count: int = 7
    encoding: str = "utf-8"
    suppress: Dict[str, str] = field(default_factory=lambda: {"httpx": "WARNING", "httpcore": "WARNING"})
    console_level: str = "INFO"
    file_level: str = "DEBUG"
    console_format: str = CONSOLE_FORMAT
    file_format: str = PLAIN_FORMAT


# ================================
# 🧰 ФОРМАТТЕРИ
# ================================
class JsonFormatter(logging.Formatter):
    """Плоский JSON: базові поля запису + усе, що передано через `extra=`."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "func": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():			# 🔎 Extra-поля (quote_seq, currency, ...)
            if key.startswith("_") or key in _RESERVED_RECORD_KEYS or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):				# ⚠️ Decimal/Enum та інше → рядок
                payload[key] = str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)		# 🌐 Арабські назви міст лишаються читабельними


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_level(value: Union[str, int, None], default: int) -> int:
    """Рядок або число → числовий рівень логування."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return getattr(logging, str(value).upper(), default)


def _make_file_handler(cfg: LoggingConfig, fmt: logging.Formatter) -> logging.Handler:
    """Файловий хендлер із ротацією за часом (директорія створюється автоматично)."""
    log_path = Path(str(cfg.file))
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(log_path),
        when=cfg.when,
        interval=cfg.interval,
        backupCount=cfg.backup_count,
        encoding=cfg.encoding,
    )
    handler.setFormatter(fmt)
    return handler


def _suppress_third_party(suppress: Dict[str, str]) -> None:
    for name, level in (suppress or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))	# 🙊 Приглушуємо


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def init_logging(
    *,
    level: Optional[str] = None,
    console: Optional[bool] = None,
    json_mode: Optional[bool] = None,
    file: Optional[str] = DEFAULT_LOG_FILE,
    suppress: Optional[Dict[str, str]] = None,
    console_level: Optional[Union[str, int]] = None,
    file_level: Optional[Union[str, int]] = None,
    console_format: Optional[str] = None,
    file_format: Optional[str] = None,
) -> logging.Logger:
    """
    Налаштовує логер `LOG_NAME`; повторний виклик замінює хендлери, а не дублює їх.

    Args:
        file: Шлях до лог-файлу; `None` вимикає файловий вивід.
    """
    with _lock:
        defaults = LoggingConfig()
        cfg = LoggingConfig(
            level=level or defaults.level,
            console=defaults.console if console is None else bool(console),
            json=defaults.json if json_mode is None else bool(json_mode),
            file=file,
            suppress=defaults.suppress if suppress is None else dict(suppress),
            console_level=str(console_level or level or defaults.console_level),
            file_level=str(file_level or level or defaults.file_level),
            console_format=console_format or CONSOLE_FORMAT,
            file_format=file_format or PLAIN_FORMAT,
        )

        root_logger = logging.getLogger(LOG_NAME)			# 🏷️ Кореневий логер пакета
        levels = [_to_level(cfg.level, logging.INFO)]
        if cfg.console:
            levels.append(_to_level(cfg.console_level, logging.INFO))
        if cfg.file:
            levels.append(_to_level(cfg.file_level, logging.DEBUG))
        root_logger.setLevel(min(levels))

        for handler in list(root_logger.handlers):			# 🧹 Прибираємо попередні хендлери
            root_logger.removeHandler(handler)
            handler.close()

        if cfg.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(cfg.console_format))
            console_handler.setLevel(_to_level(cfg.console_level, logging.INFO))
            root_logger.addHandler(console_handler)

        if cfg.file:
            fmt_file = JsonFormatter() if cfg.json else logging.Formatter(cfg.file_format)
            file_handler = _make_file_handler(cfg, fmt_file)
            file_handler.setLevel(_to_level(cfg.file_level, logging.DEBUG))
            root_logger.addHandler(file_handler)

        _suppress_third_party(cfg.suppress)

        root_logger.info(
            "✅ Logging initialized | level=%s console=%s json=%s file=%s",
            cfg.level.upper(),
            "ON" if cfg.console else "OFF",
            "ON" if cfg.json else "OFF",
            cfg.file or "OFF",
        )
        return root_logger


def init_logging_from_config(config: Optional[Dict[str, Any]]) -> logging.Logger:
    """
    Ініціалізує логування з секції `logging` конфігурації (`ConfigService.get("logging")`).

    Відсутній ключ `file` означає шлях за замовчуванням, явний `null` вимикає файл.
    """
    node = dict(config or {})
    return init_logging(
        level=node.get("level"),
        console=node.get("console"),
        json_mode=node.get("json"),
        file=node.get("file", DEFAULT_LOG_FILE),
        suppress=node.get("suppress"),
        console_level=node.get("console_level"),
        file_level=node.get("file_level"),
        console_format=node.get("console_format"),
        file_format=node.get("file_format"),
    )


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Дочірній логер `checkout_engine.<suffix>` (або кореневий, якщо суфікса немає)."""
    logger_name = LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}"
    return logging.getLogger(logger_name)


__all__ = [
    "LOG_NAME",
    "LoggingConfig",
    "JsonFormatter",
    "init_logging",
    "init_logging_from_config",
    "get_logger",
]
