# ⚙️ checkout_engine/domain/settings/checkout_settings.py
"""
⚙️ Налаштування checkout, що передаються в ядро явно під час виклику.

🔹 `CategoryTaxRate`: ставка податку категорії в [0, 1] з перемикачем.
🔹 `ShippingMethod`: спосіб доставки з типом ціноутворення (flat / weight_based / order_based / api_calculated).
🔹 `CheckoutSettings`: legacy-ставка, таблиця категорій, країни, способи доставки.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.currency.interfaces import CurrencyCode
from checkout_engine.domain.products.entities import PriceMap, price_map

DEFAULT_TAX_RATE = Decimal("0.1")
DEFAULT_ENABLED_COUNTRIES: Tuple[str, ...] = ("OM", "AE", "SA", "KW", "IQ")


class PricingType(str, Enum):
    FLAT = "flat"
    WEIGHT_BASED = "weight_based"
    ORDER_BASED = "order_based"
    API_CALCULATED = "api_calculated"


@dataclass(frozen=True, slots=True)
class CategoryTaxRate:
    category_id: str
    tax_rate: Decimal
    enabled: bool = True
    category_name: str = ""
    category_name_ar: str = ""

    def __post_init__(self) -> None:
        rate = self.tax_rate if isinstance(self.tax_rate, Decimal) else Decimal(str(self.tax_rate))
        if not Decimal("0") <= rate <= Decimal("1"):
            raise ValueError(f"tax_rate for {self.category_id!r} must be within [0, 1], got {rate}")
        object.__setattr__(self, "tax_rate", rate)


@dataclass(frozen=True, slots=True)
class OrderTier:
    """Поріг вартості замовлення (в базовій валюті) → вартість доставки по валютах."""

    min_order_value: Decimal = Decimal("0")
    max_order_value: Optional[Decimal] = None          # 🔓 None → без верхньої межі
    costs: PriceMap = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "costs", price_map(self.costs))

    def matches(self, order_value: Decimal) -> bool:
        if order_value < self.min_order_value:
            return False
        return self.max_order_value is None or order_value <= self.max_order_value


@dataclass(frozen=True, slots=True)
class ShippingMethod:
    id: str
    name: str = ""
    name_ar: str = ""
    enabled: bool = True
    is_free: bool = False
    pricing_type: PricingType = PricingType.FLAT
    base_costs: PriceMap = field(default_factory=lambda: MappingProxyType({}))
    cost_per_kg: PriceMap = field(default_factory=lambda: MappingProxyType({}))
    order_tiers: Tuple[OrderTier, ...] = ()
    min_order_value: Optional[Decimal] = None          # 🏦 У базовій валюті (OMR)
    max_order_value: Optional[Decimal] = None
    restricted_countries: Tuple[str, ...] = ()
    estimated_delivery_days: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "pricing_type", PricingType(self.pricing_type))
        object.__setattr__(self, "base_costs", price_map(self.base_costs))
        object.__setattr__(self, "cost_per_kg", price_map(self.cost_per_kg))
        object.__setattr__(self, "order_tiers", tuple(self.order_tiers))
        object.__setattr__(self, "restricted_countries", tuple(c.upper() for c in self.restricted_countries))

    def allows_country(self, country_code: str) -> bool:
        return (country_code or "").upper() not in self.restricted_countries

    def allows_order_value(self, order_value: Decimal) -> bool:
        if self.min_order_value is not None and order_value < self.min_order_value:
            return False
        if self.max_order_value is not None and order_value > self.max_order_value:
            return False
        return True


@dataclass(frozen=True, slots=True)
class CheckoutSettings:
    tax_rate: Decimal = DEFAULT_TAX_RATE               # 🧾 Legacy глобальна ставка
    category_tax_rates: Tuple[CategoryTaxRate, ...] = ()
    enabled_countries: Tuple[str, ...] = DEFAULT_ENABLED_COUNTRIES
    shipping_methods: Tuple[ShippingMethod, ...] = ()

    def __post_init__(self) -> None:
        rate = self.tax_rate if isinstance(self.tax_rate, Decimal) else Decimal(str(self.tax_rate))
        if not Decimal("0") <= rate <= Decimal("1"):
            raise ValueError(f"tax_rate must be within [0, 1], got {rate}")
        object.__setattr__(self, "tax_rate", rate)
        object.__setattr__(self, "category_tax_rates", tuple(self.category_tax_rates))
        object.__setattr__(self, "enabled_countries", tuple(c.upper() for c in self.enabled_countries))
        object.__setattr__(self, "shipping_methods", tuple(self.shipping_methods))

    def method(self, method_id: str) -> Optional[ShippingMethod]:
        for method in self.shipping_methods:
            if method.id == method_id:
                return method
        return None


def default_shipping_methods() -> Tuple[ShippingMethod, ...]:
    """Самовивіз (безкоштовно) та фіксована доставка по Оману."""
    return (
        ShippingMethod(
            id="pickup",
            name="Pickup from Store",
            name_ar="الاستلام من المتجر",
            is_free=True,
            pricing_type=PricingType.FLAT,
            base_costs={CurrencyCode.OMR: "0", CurrencyCode.USD: "0", CurrencyCode.SAR: "0"},
            estimated_delivery_days="Same day",
        ),
        ShippingMethod(
            id="nool_oman",
            name="Nool Delivery (Oman)",
            name_ar="توصيل نول (عُمان)",
            pricing_type=PricingType.FLAT,
            base_costs={CurrencyCode.OMR: "2", CurrencyCode.USD: "5.2", CurrencyCode.SAR: "19.5"},
            estimated_delivery_days="1-3 days",
        ),
    )


def default_checkout_settings() -> CheckoutSettings:
    return CheckoutSettings(shipping_methods=default_shipping_methods())


__all__ = [
    "DEFAULT_TAX_RATE",
    "DEFAULT_ENABLED_COUNTRIES",
    "PricingType",
    "CategoryTaxRate",
    "OrderTier",
    "ShippingMethod",
    "CheckoutSettings",
    "default_shipping_methods",
    "default_checkout_settings",
]
