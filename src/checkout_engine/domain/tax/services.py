# 🧾 checkout_engine/domain/tax/services.py
"""
🧾 `TaxEngine`: податок рядка за ставкою його категорії.

🔹 Увімкнена ставка категорії має пріоритет; інакше legacy глобальна `tax_rate`.
🔹 Податок рахується для кожного рядка окремо і лише потім сумується.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from decimal import Decimal
from typing import Iterable, Optional, Tuple, Union

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.settings.checkout_settings import CheckoutSettings
from checkout_engine.domain.currency.interfaces import CurrencyCode, IMoneyConverter, Money
from checkout_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.tax")


class TaxEngine:
    """🧾 Ставки податку за категоріями з fallback на глобальну ставку."""

    def __init__(self, converter: IMoneyConverter) -> None:
        self._converter = converter                                  # 📐 Квантування до мінорної одиниці

    def rate_for(self, category_id: Optional[str], settings: CheckoutSettings) -> Decimal:
        if category_id:
            for entry in settings.category_tax_rates:
                if entry.category_id == category_id and entry.enabled:
                    return entry.tax_rate
        return settings.tax_rate

    def tax_for(self, line_subtotal: Money, category_id: Optional[str], settings: CheckoutSettings) -> Money:
        """subtotal × rate, округлене до мінорної одиниці валюти рядка."""
        rate = self.rate_for(category_id, settings)
        amount = self._converter.quantize(line_subtotal.amount * rate, line_subtotal.currency)
        logger.debug(
            "🧾 Tax | category=%s rate=%s subtotal=%s %s → %s",
            category_id,
            rate,
            line_subtotal.amount,
            line_subtotal.currency,
            amount,
        )
        return Money(amount, line_subtotal.currency)

    def total_tax(
        self,
        lines: Iterable[Tuple[Money, Optional[str]]],
        settings: CheckoutSettings,
        currency: Optional[Union[str, CurrencyCode]] = None,
    ) -> Money:
        """Σ податків по рядках `(subtotal, category_id)`; порожній кошик дає нуль у `currency` (OMR за замовчуванням)."""
        taxes = [self.tax_for(subtotal, category, settings) for subtotal, category in lines]
        if currency is None:
            currency = taxes[0].currency if taxes else CurrencyCode.OMR
        total = Money.zero(currency)
        for tax in taxes:
            total = total + tax
        return total


__all__ = ["TaxEngine"]
