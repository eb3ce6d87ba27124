# ⚖️ checkout_engine/domain/products/services/weight_resolver.py
"""
⚖️ `WeightResolver`: доменний сервіс визначення ваги рядка кошика у кілограмах.

🔹 Порядок fallback-ів: опція властивості «вага/розмір» → вага товару → дефолт категорії.
🔹 Вільний текст мітки («250g», «1.5 kg», «500 جرام») розбирається іменованою стратегією.
🔹 Вага для перевізника: не менше 0.1 кг, не більше 50 кг.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                                       # 🧾 Єдине джерело логування
import re                                                                            # 🔍 Розбір міток ваги
from dataclasses import dataclass, field                                             # 🧱 Опис сервісу як dataclass
from decimal import Decimal, InvalidOperation                                        # ⚖️ Точна вага
from enum import Enum                                                                # 🔖 Стратегії розбору
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

# 🧩 Внутрішні модулі проєкту
from checkout_engine.config.config_service import ConfigService
from checkout_engine.domain.products.entities import (
    CartLine,
    Product,
    ProductProperty,
    ProductVariantOption,
)
from checkout_engine.errors.custom_errors import ValidationError
from checkout_engine.shared.utils.immutables import freeze
from checkout_engine.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР МОДУЛЯ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.domain.products.weight")


# ================================
# ⚙️ САНІТІ-КОНСТАНТИ
# ================================
MIN_SHIPPING_KG = Decimal("0.1")                                                     # 📦 Мінімум перевізника (100 г)
MAX_SHIPPING_KG = Decimal("50")                                                      # 🔼 Максимум для відправлення
MISSING_PRODUCT_KG = Decimal("0.5")                                                  # ❔ Товару немає в каталозі
FALLBACK_KG = Decimal("0.5")                                                         # 🧊 Категорія невідома
GRAMS_THRESHOLD = Decimal("10")                                                      # 📏 > 10 → вважаємо грамами
_THOUSAND = Decimal("1000")

DEFAULT_CATEGORY_WEIGHTS: Mapping[str, Decimal] = MappingProxyType(
    {
        "coffee-beans": Decimal("0.25"),
        "ground-coffee": Decimal("0.25"),
        "capsules": Decimal("0.1"),
        "equipment": Decimal("1.0"),
        "accessories": Decimal("0.5"),
        "apparel": Decimal("0.3"),
    }
)

_NAME_TOKENS = ("weight", "size", "وزن")
_NAME_AR_TOKENS = ("وزن", "حجم", "كجم", "جرام")

# 🔍 Токени одиниць, які прибираються перед пошуком числа
_UNIT_TOKENS_RE = re.compile(
    r"(kilograms|kilogram|grams|gram|weight|size|وزن|حجم|كجم|جرام|kg|g)",
    re.IGNORECASE,
)
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")

_KG_UNITS = r"kilograms?|kgs?|كجم|كغ|كيلو(?:جرام|غرام)?"
_G_UNITS = r"grams?|gr|g|جرام|غرام|جم|غ"
_AMOUNT_WITH_UNIT_RE = re.compile(
    rf"(\d+(?:\.\d+)?)\s*({_KG_UNITS}|{_G_UNITS})(?![a-z])",
    re.IGNORECASE,
)
_KG_UNIT_RE = re.compile(rf"(?:{_KG_UNITS})", re.IGNORECASE)


# ================================
# 🧮 РОЗБІР МІТОК ВАГИ
# ================================
class WeightParseStrategy(str, Enum):
    """
    MAGNITUDE: поведінка каталогу за замовчуванням: прибрати одиниці, взяти перше число,
    значення > 10 вважати грамами («15kg» → 0.015).
    UNIT_FIRST: явна одиниця поруч із числом має пріоритет; без одиниці → MAGNITUDE.
    """

    MAGNITUDE = "magnitude"
    UNIT_FIRST = "unit_first"

    @classmethod
    def parse(cls, value: Union[str, "WeightParseStrategy", None]) -> "WeightParseStrategy":
        if isinstance(value, WeightParseStrategy):
            return value
        try:
            return cls(str(value or cls.MAGNITUDE.value).strip().lower())
        except ValueError:
            logger.warning("⚠️ Невідома стратегія розбору ваги %r → magnitude", value)
            return cls.MAGNITUDE


def _to_decimal(raw: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation:
        return Decimal("0")


def _parse_by_magnitude(label: str) -> Decimal:
    cleaned = _UNIT_TOKENS_RE.sub("", label).strip()
    match = _NUMBER_RE.search(cleaned)
    if not match:
        return Decimal("0")
    value = _to_decimal(match.group(0))
    if value > GRAMS_THRESHOLD:
        return value / _THOUSAND
    return value


def _parse_unit_first(label: str) -> Decimal:
    match = _AMOUNT_WITH_UNIT_RE.search(label)
    if not match:
        return _parse_by_magnitude(label)
    value = _to_decimal(match.group(1))
    if _KG_UNIT_RE.fullmatch(match.group(2)):
        return value
    return value / _THOUSAND


def parse_weight(
    label: Optional[str],
    strategy: Union[str, WeightParseStrategy] = WeightParseStrategy.MAGNITUDE,
) -> Decimal:
    """
    Перетворює вільний текст мітки на вагу в кг; 0, якщо числа немає.

    >>> parse_weight("250g")
    Decimal('0.25')
    """
    text = (label or "").strip()
    if not text:
        return Decimal("0")
    chosen = WeightParseStrategy.parse(strategy)
    if chosen is WeightParseStrategy.UNIT_FIRST:
        result = _parse_unit_first(text)
    else:
        result = _parse_by_magnitude(text)
    logger.debug("⚖️ parse_weight(%r, %s) → %s кг", text, chosen.value, result)
    return result


# ================================
# 🔎 ВЛАСТИВІСТЬ «ВАГА/РОЗМІР»
# ================================
def is_weight_property(prop: ProductProperty) -> bool:
    name = (prop.name or "").lower()
    name_ar = prop.name_ar or ""
    if prop.type == "size" and any(token in name for token in _NAME_TOKENS):
        return True
    return any(token in name_ar for token in _NAME_AR_TOKENS)


def find_weight_property(product: Product) -> Optional[ProductProperty]:
    for prop in product.properties:
        if is_weight_property(prop):
            return prop
    return None


def selected_weight_option(line: CartLine, product: Product) -> Optional[ProductVariantOption]:
    """Вибрана опція ваги; якщо нічого не вибрано: перша опція властивості."""
    prop = find_weight_property(product)
    if prop is None or not prop.options:
        return None
    chosen = prop.option(line.selected_options.get(prop.id))
    return chosen or prop.options[0]


def format_weight(weight_kg: Union[Decimal, int, str], lang: str = "en") -> str:
    """`1.5 kg` / `250 g`; арабською: `كيلوجرام` / `جرام`."""
    weight = Decimal(str(weight_kg))
    arabic = lang == "ar"
    if weight >= 1:
        unit = "كيلوجرام" if arabic else "kg"
        return f"{weight:.1f} {unit}"
    unit = "جرام" if arabic else "g"
    return f"{weight * _THOUSAND:.0f} {unit}"


# ================================
# ⚖️ СЕРВІС
# ================================
@dataclass(slots=True)
class WeightResolver:
    """⚖️ Розраховує вагу рядків і кошика; не має побічних ефектів."""

    strategy: WeightParseStrategy = WeightParseStrategy.MAGNITUDE
    category_defaults: Mapping[str, Decimal] = field(default_factory=lambda: DEFAULT_CATEGORY_WEIGHTS)
    fallback_kg: Decimal = FALLBACK_KG
    missing_product_kg: Decimal = MISSING_PRODUCT_KG
    min_shipping_kg: Decimal = MIN_SHIPPING_KG
    max_shipping_kg: Decimal = MAX_SHIPPING_KG

    @classmethod
    def from_config(cls, config: ConfigService) -> "WeightResolver":
        """🏗️ Читає секцію `weight`; відсутні ключі беруться з констант модуля."""
        raw_defaults = config.get("weight.category_defaults") or {}
        defaults = {str(k).lower(): Decimal(str(v)) for k, v in raw_defaults.items()} or dict(DEFAULT_CATEGORY_WEIGHTS)
        return cls(
            strategy=WeightParseStrategy.parse(config.get("weight.parse_strategy")),
            category_defaults=freeze(defaults),
            fallback_kg=Decimal(str(config.get("weight.fallback_kg", FALLBACK_KG))),
            missing_product_kg=Decimal(str(config.get("weight.missing_product_kg", MISSING_PRODUCT_KG))),
            min_shipping_kg=Decimal(str(config.get("weight.min_shipping_kg", MIN_SHIPPING_KG))),
            max_shipping_kg=Decimal(str(config.get("weight.max_shipping_kg", MAX_SHIPPING_KG))),
        )

    def category_default_weight(self, category_id: Optional[str]) -> Decimal:
        key = (category_id or "").strip().lower()
        return self.category_defaults.get(key, self.fallback_kg)

    def resolve_line_weight(self, line: CartLine, product: Optional[Product]) -> Decimal:
        """
        Вага однієї одиниці товару в рядку (кг).

        Args:
            line: Рядок кошика з вибраними опціями.
            product: Товар каталогу; None → `missing_product_kg`.
        """
        if product is None:
            logger.warning("⚠️ Товар %s відсутній у каталозі → %s кг", line.product_id, self.missing_product_kg)
            return self.missing_product_kg

        option = selected_weight_option(line, product)
        if option is not None:
            parsed = parse_weight(option.display_label, self.strategy)
            if parsed > 0:
                logger.debug("⚖️ %s: вага з опції %r → %s кг", product.id, option.display_label, parsed)
                return parsed
            logger.debug("🔁 %s: мітку %r не розібрано, fallback на вагу товару", product.id, option.display_label)

        if product.weight_kg is not None and product.weight_kg > 0:
            return product.weight_kg

        default = self.category_default_weight(product.category_id)
        logger.debug("🧊 %s: дефолт категорії %r → %s кг", product.id, product.category_id, default)
        return default

    def total_cart_weight(self, lines: Iterable[CartLine], catalog: Mapping[str, Product]) -> Decimal:
        """Σ вага одиниці × кількість."""
        total = Decimal("0")
        for line in lines:
            total += self.resolve_line_weight(line, catalog.get(line.product_id)) * line.quantity
        logger.info("⚖️ Загальна вага кошика: %s кг", total)
        return total

    def shipping_weight(self, total_weight: Decimal) -> Decimal:
        """max(total, мінімум перевізника)."""
        return max(Decimal(str(total_weight)), self.min_shipping_kg)

    def validate_for_shipping(self, weight_kg: Decimal) -> Decimal:
        """Повертає вагу, якщо її можна відправити; інакше `ValidationError`."""
        weight = Decimal(str(weight_kg))
        if weight <= 0:
            raise ValidationError(
                "Weight must be greater than zero / يجب أن يكون الوزن أكبر من الصفر",
                field="weight",
                reason="non-positive",
            )
        if weight > self.max_shipping_kg:
            raise ValidationError(
                f"Weight exceeds maximum limit ({self.max_shipping_kg}kg) / الوزن يتجاوز الحد الأقصى",
                field="weight",
                reason="too-heavy",
            )
        return weight

    def is_shippable(self, weight_kg: Decimal) -> bool:
        try:
            self.validate_for_shipping(weight_kg)
        except ValidationError:
            return False
        return True

    def describe_line_weight(self, line: CartLine, product: Product, lang: str = "en") -> str:
        """Підпис ваги для кошика: мітка опції, інакше відформатована вага товару."""
        option = selected_weight_option(line, product)
        if option is not None:
            if lang == "ar":
                return option.label_ar or option.label or option.value
            return option.label or option.value
        if product.weight_kg:
            return format_weight(product.weight_kg, lang)
        return "الوزن غير محدد" if lang == "ar" else "Weight not specified"


__all__ = [
    "WeightParseStrategy",
    "WeightResolver",
    "parse_weight",
    "is_weight_property",
    "find_weight_property",
    "selected_weight_option",
    "format_weight",
    "DEFAULT_CATEGORY_WEIGHTS",
    "MIN_SHIPPING_KG",
    "MAX_SHIPPING_KG",
]
