# 🚨 checkout_engine/errors/custom_errors.py
"""
🚨 Ієрархія винятків ядра checkout.

🔹 `ValidationError`: некоректний/неповний пункт призначення або вага поза межами (відновлюється локально).
🔹 `ProviderError`: перевізник недоступний, таймаут або явна відмова (transient/terminal).
🔹 `PricingDataError`: у товару/опції бракує цінових даних; рахувати замовлення не можна.
🔹 `StaleResultDiscarded`: внутрішній маркер застарілої відповіді, не для користувача.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення помилок
from typing import Dict, Optional									# 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from checkout_engine.shared.utils.logger import LOG_NAME			# 🏷️ Єдиний префікс логерів


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Стабільні коди для логів та UI-шару."""

    VALIDATION = "validation_error"
    PROVIDER = "provider_error"
    PRICING_DATA = "pricing_data_error"
    SETTINGS = "settings_error"
    UNKNOWN = "unknown_error"


# ================================
# 🧠 БАЗОВІ КЛАСИ
# ================================
class AppError(Exception):
    """🧠 Базова помилка пакета: коротке повідомлення + технічні деталі."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Словник для `logger.*(..., extra=...)`."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, текст якої можна показати покупцю."""


# ================================
# 🧾 ДОМЕННІ ВИНЯТКИ
# ================================
class ValidationError(UserVisibleError):
    """🧭 Некоректний пункт призначення, стан вибору або вага поза межами доставки."""

    code = ErrorCode.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        reason: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.field = field											# 🏷️ country / state / city / weight / quantity
        self.reason = reason										# 🔖 Машиночитна причина
        logger.debug("🧭 ValidationError: %s", message, extra={"field": field, "reason": reason})

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.field:
            extra["field"] = self.field
        if self.reason:
            extra["reason"] = self.reason
        return extra


class ProviderError(AppError):
    """🌐 Збій зовнішнього провайдера тарифів (мережа, таймаут, відмова)."""

    code = ErrorCode.PROVIDER

    def __init__(
        self,
        message: str,
        *,
        transient: bool = False,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.transient = transient									# 🔁 Чи має сенс повтор
        self.status_code = status_code
        self.url = url

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["transient"] = self.transient
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        if self.url:
            extra["url"] = self.url
        return extra


class PricingDataError(AppError):
    """💸 Бракує цінових даних, потрібних для обчислення (дефект конфігурації)."""

    code = ErrorCode.PRICING_DATA

    MISSING_PRICE_DATA = "missing-price-data"
    MISSING_PRODUCT = "missing-product"
    INVALID_PRICE = "invalid-price"

    def __init__(
        self,
        message: str,
        *,
        kind: str = MISSING_PRICE_DATA,
        product_id: Optional[str] = None,
        currency: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.kind = kind
        self.product_id = product_id
        self.currency = currency
        logger.debug(
            "💸 PricingDataError(%s): %s",
            kind,
            message,
            extra={"product_id": product_id, "currency": currency},
        )

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["kind"] = self.kind
        if self.product_id:
            extra["product_id"] = self.product_id
        if self.currency:
            extra["currency"] = self.currency
        return extra


class SettingsError(AppError):
    """⚙️ Некоректний документ налаштувань (ставка податку, тип ціноутворення тощо)."""

    code = ErrorCode.SETTINGS


class StaleResultDiscarded(Exception):
    """⏳ Відповідь перевізника застаріла: з'явився новіший запит у сесії."""

    def __init__(self, seq: int, latest_seq: int) -> None:
        super().__init__(f"quote #{seq} superseded by #{latest_seq}")
        self.seq = seq
        self.latest_seq = latest_seq


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "ValidationError",
    "ProviderError",
    "PricingDataError",
    "SettingsError",
    "StaleResultDiscarded",
]
