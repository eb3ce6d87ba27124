# 📐 checkout_engine/domain/pricing/interfaces.py
"""
📐 DTO та контракт ціноутворення рядка кошика.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Protocol

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.currency.interfaces import CurrencyCode, Money
from checkout_engine.domain.products.entities import Product


@dataclass(frozen=True, slots=True)
class LinePrice:
    """💸 Результат ціноутворення одного рядка у валюті відображення."""

    product_id: str
    quantity: int
    unit_price: Money                                   # 💵 Фактична ціна одиниці
    total: Money                                        # 🧮 unit_price × quantity
    on_sale: bool = False
    original_unit_price: Optional[Money] = None         # 🏷️ Регулярна ціна, якщо діє розпродаж

    @property
    def currency(self) -> CurrencyCode:
        return self.unit_price.currency


class IPricingResolver(Protocol):
    def resolve_line_price(
        self,
        product: Product,
        selected_options: Mapping[str, str],
        currency: CurrencyCode,
        quantity: int = 1,
        now: Optional[datetime] = None,
    ) -> LinePrice:
        ...


__all__ = ["LinePrice", "IPricingResolver"]
