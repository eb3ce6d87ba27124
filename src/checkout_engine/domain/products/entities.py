# 📦 checkout_engine/domain/products/entities.py
"""
📦 Доменно-чисті сутності каталогу та кошика.

🔹 `PriceSpec`: тегований варіант: `AbsolutePrice` (замінює базову ціну) або
   `PriceModifier` (дельта до базової ціни). Вид визначається один раз при завантаженні.
🔹 `SaleWindow`: прапорець розпродажу + часове вікно [start, end].
🔹 Усі сутності іммʼютабельні (frozen dataclass + mapping proxy).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування валідації
from dataclasses import dataclass, field                            # 🧱 Опис сутностей
from datetime import datetime, timezone                             # 📅 Вікна розпродажу
from decimal import Decimal                                         # 💰 Гроші та вага
from enum import Enum                                               # 🔖 Вид цінової специфікації
from types import MappingProxyType                                  # 🧊 Незмінні мапи
from typing import Mapping, Optional, Tuple, Union                  # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.currency.interfaces import CurrencyCode
from checkout_engine.errors.custom_errors import ValidationError
from checkout_engine.shared.utils.immutables import frozen_mapping
from checkout_engine.shared.utils.logger import LOG_NAME

# ================================
# 🪵 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.domain.products")

PriceMap = Mapping[CurrencyCode, Decimal]                           # 💱 Валюта → сума


# ================================
# 🧊 ІММ'ЮТАБЕЛЬНІ МАПИ
# ================================
def price_map(data: Optional[Mapping[object, object]]) -> PriceMap:
    """Нормалізує ключі до `CurrencyCode`, значення до Decimal, і заморожує."""
    result = {}
    for key, value in (data or {}).items():
        if value is None:
            continue
        result[CurrencyCode.parse(key)] = value if isinstance(value, Decimal) else Decimal(str(value))
    return frozen_mapping(result)


def _aware(moment: Optional[datetime]) -> Optional[datetime]:
    """Наївні дати трактуємо як UTC, щоб порівняння не падало."""
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=timezone.utc)


# ================================
# ⏳ ВІКНО РОЗПРОДАЖУ
# ================================
@dataclass(frozen=True, slots=True)
class SaleWindow:
    """Розпродаж активний, якщо `on_sale` і `starts_at ≤ now ≤ ends_at` (відкриті межі дозволені)."""

    on_sale: bool = False
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "starts_at", _aware(self.starts_at))
        object.__setattr__(self, "ends_at", _aware(self.ends_at))

    def is_active(self, now: datetime) -> bool:
        if not self.on_sale:
            return False
        moment = _aware(now)
        if self.starts_at is not None and moment < self.starts_at:
            return False
        if self.ends_at is not None and moment > self.ends_at:
            return False
        return True


NO_SALE = SaleWindow()


# ================================
# 💸 ЦІНОВА СПЕЦИФІКАЦІЯ ОПЦІЇ
# ================================
class PriceKind(str, Enum):
    ABSOLUTE = "absolute"
    MODIFIER = "modifier"


@dataclass(frozen=True, slots=True)
class AbsolutePrice:
    """Абсолютна ціна: замінює базову ціну товару (не додається)."""

    prices: PriceMap = field(default_factory=lambda: MappingProxyType({}))
    sale_prices: PriceMap = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "prices", price_map(self.prices))
        object.__setattr__(self, "sale_prices", price_map(self.sale_prices))

    @property
    def kind(self) -> PriceKind:
        return PriceKind.ABSOLUTE


@dataclass(frozen=True, slots=True)
class PriceModifier:
    """
    Модифікатор: дельта до базової ціни.

    Під час розпродажу `sale_deltas` замінюють дельту, а `sale_prices` (абсолютна ціна
    розпродажу опції) перекривають усю ціну рядка.
    """

    deltas: PriceMap = field(default_factory=lambda: MappingProxyType({}))
    sale_deltas: PriceMap = field(default_factory=lambda: MappingProxyType({}))
    sale_prices: PriceMap = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "deltas", price_map(self.deltas))
        object.__setattr__(self, "sale_deltas", price_map(self.sale_deltas))
        object.__setattr__(self, "sale_prices", price_map(self.sale_prices))

    @property
    def kind(self) -> PriceKind:
        return PriceKind.MODIFIER


PriceSpec = Union[AbsolutePrice, PriceModifier]


# ================================
# 🧩 ВЛАСТИВОСТІ ТА ОПЦІЇ
# ================================
@dataclass(frozen=True, slots=True)
class ProductVariantOption:
    id: str
    property_id: str
    value: str = ""
    label: str = ""
    label_ar: str = ""
    price_spec: Optional[PriceSpec] = None                          # 🚫 None → опція не впливає на ціну
    sale: SaleWindow = NO_SALE

    @property
    def display_label(self) -> str:
        """Текст для розбору ваги: value → label → label_ar."""
        return self.value or self.label or self.label_ar or ""


@dataclass(frozen=True, slots=True)
class ProductProperty:
    id: str
    name: str = ""
    name_ar: str = ""
    type: str = "select"
    options: Tuple[ProductVariantOption, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))

    def option(self, option_id: Optional[str]) -> Optional[ProductVariantOption]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


# ================================
# 🛍️ ТОВАР
# ================================
@dataclass(frozen=True, slots=True)
class Product:
    """Товар каталогу: базові ціни по валютах, власний розпродаж, вага (кг) і властивості."""

    id: str
    name: str = ""
    category_id: Optional[str] = None
    prices: PriceMap = field(default_factory=lambda: MappingProxyType({}))
    sale_prices: PriceMap = field(default_factory=lambda: MappingProxyType({}))
    sale: SaleWindow = NO_SALE
    weight_kg: Optional[Decimal] = None
    properties: Tuple[ProductProperty, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "prices", price_map(self.prices))
        object.__setattr__(self, "sale_prices", price_map(self.sale_prices))
        object.__setattr__(self, "properties", tuple(self.properties))
        if self.weight_kg is not None and not isinstance(self.weight_kg, Decimal):
            object.__setattr__(self, "weight_kg", Decimal(str(self.weight_kg)))

    def find_property(self, property_id: str) -> Optional[ProductProperty]:
        for prop in self.properties:
            if prop.id == property_id:
                return prop
        return None


# ================================
# 🛒 РЯДОК КОШИКА
# ================================
@dataclass(frozen=True, slots=True)
class CartLine:
    """Товар + вибрані опції (property_id → option_id) + кількість ≥ 1."""

    product_id: str
    quantity: int = 1
    selected_options: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            logger.warning("⚠️ CartLine: некоректна кількість %r для %s", self.quantity, self.product_id)
            raise ValidationError(
                f"Quantity must be a positive integer, got {self.quantity!r}",
                field="quantity",
                reason="invalid-quantity",
            )
        object.__setattr__(self, "selected_options", frozen_mapping(self.selected_options))


__all__ = [
    "PriceMap",
    "price_map",
    "SaleWindow",
    "NO_SALE",
    "PriceKind",
    "AbsolutePrice",
    "PriceModifier",
    "PriceSpec",
    "ProductVariantOption",
    "ProductProperty",
    "Product",
    "CartLine",
]
