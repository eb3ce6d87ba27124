# 📜 checkout_engine/errors/strategies.py
"""
📜 Стратегії конвертації сторонніх винятків у доменні `AppError`.

🔹 `HttpxErrorStrategy` класифікує збої httpx: transient (повторюємо) чи terminal.
🔹 Будь-який інший `httpx.HTTPError` стає остаточним `ProviderError`.
🔹 Нові стратегії додаються без зміни клієнтів перевізника.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт (винятки)

# 🔠 Системні імпорти
import logging															# 🧾 Логування стратегій
from typing import Optional, Protocol									# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from checkout_engine.shared.utils.logger import LOG_NAME
from .custom_errors import AppError, ProviderError


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors.strategies")

_TRANSIENT_STATUSES = frozenset({408, 425, 429})						# ⏱️ 4xx, які все ж варто повторити


# ================================
# 🧠 КОНТРАКТ СТРАТЕГІЙ
# ================================
class IErrorHandlingStrategy(Protocol):
    """🧠 Повертає `AppError`, якщо виняток розпізнано, інакше None."""

    def handle(self, error: Exception) -> Optional[AppError]:
        ...


def _request_url(error: Exception) -> str:
    try:
        return str(error.request.url)									# type: ignore[attr-defined]
    except (AttributeError, RuntimeError):								# 🧩 httpx кидає RuntimeError, якщо request не привʼязаний
        return "N/A"


def is_transient_status(status_code: int) -> bool:
    """5xx та кілька «тимчасових» 4xx; решта 4xx (наприклад, «не обслуговується»): остаточні."""
    return status_code >= 500 or status_code in _TRANSIENT_STATUSES


# ================================
# 🌐 HTTPX-СТРАТЕГІЯ
# ================================
class HttpxErrorStrategy(IErrorHandlingStrategy):
    """🌐 Перетворює httpx-помилки на `ProviderError` з ознакою `transient`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        if isinstance(error, httpx.TimeoutException):					# ⏱️ Connect/Read/Write/Pool timeout
            url = _request_url(error)
            logger.debug("⏱️ httpx timeout", extra={"url": url})
            return ProviderError("Carrier request timed out", transient=True, url=url, details=str(error))

        if isinstance(error, httpx.HTTPStatusError):					# 🔢 Неочікуваний статус
            url = _request_url(error)
            status = error.response.status_code
            transient = is_transient_status(status)
            logger.debug("🔢 httpx status error", extra={"url": url, "status": status, "transient": transient})
            return ProviderError(
                f"Carrier responded with HTTP {status}",
                transient=transient,
                status_code=status,
                url=url,
                details=str(error),
            )

        if isinstance(error, httpx.TransportError):						# 🌐 Connect/Network/Protocol
            url = _request_url(error)
            logger.debug("🌐 httpx transport error", extra={"url": url})
            return ProviderError("Carrier is unreachable", transient=True, url=url, details=str(error))

        if isinstance(error, httpx.HTTPError):								# 🧱 Redirects, decoding та інше: остаточно
            url = _request_url(error)
            logger.debug("🧱 httpx error", extra={"url": url, "error_type": type(error).__name__})
            return ProviderError("Carrier request failed", transient=False, url=url, details=repr(error))

        return None


__all__ = [
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
    "is_transient_status",
]
