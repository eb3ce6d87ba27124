# 🧾 checkout_engine/domain/checkout/interfaces.py
"""
🧾 DTO підсумку замовлення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.currency.interfaces import CurrencyCode, Money
from checkout_engine.domain.pricing.interfaces import LinePrice


class IncompleteReason:
    """Чому вартість доставки (а отже і підсумок) не визначена."""

    NO_METHOD = "no-shipping-method"
    METHOD_DISABLED = "method-disabled"
    METHOD_RESTRICTED = "method-restricted"
    ORDER_VALUE_OUT_OF_RANGE = "order-value-out-of-range"
    MISSING_SHIPPING_COST = "missing-shipping-cost"
    NO_MATCHING_TIER = "no-matching-tier"
    INVALID_DESTINATION = "invalid-destination"
    INVALID_WEIGHT = "invalid-weight"
    QUOTE_PENDING = "quote-pending"
    QUOTE_OUTDATED = "quote-outdated"
    PROVIDER_ERROR = "provider-error"


@dataclass(frozen=True, slots=True)
class ShippingResolution:
    cost: Optional[Money] = None
    reason: Optional[str] = None                 # 🚫 Заповнюється, якщо cost відсутній

    @property
    def resolved(self) -> bool:
        return self.cost is not None


@dataclass(frozen=True, slots=True)
class OrderTotal:
    """
    Підсумок замовлення у валюті покупця.

    Якщо доставку визначити неможливо, `complete=False`, `shipping` та `grand_total`: None
    (нуль ніколи не підставляється).
    """

    currency: CurrencyCode
    lines: Tuple[LinePrice, ...]
    subtotal: Money
    tax: Money
    shipping: Optional[Money]
    grand_total: Optional[Money]
    total_weight_kg: Decimal
    shipping_weight_kg: Decimal
    incomplete_reason: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.grand_total is not None


__all__ = ["IncompleteReason", "ShippingResolution", "OrderTotal"]
