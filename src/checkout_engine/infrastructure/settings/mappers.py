# 🗂️ checkout_engine/infrastructure/settings/mappers.py
"""
🗂️ Мапери «сирих» JSON-записів магазину → доменні сутності.

🔹 Вид цінової специфікації опції визначається тут, один раз:
   є `price_omr|usd|sar` → `AbsolutePrice`; є `price_modifier_*` → `PriceModifier`; інакше None.
🔹 Legacy-поле `price_modifier` без валюти трактується як OMR.
🔹 Некоректні ставки чи типи ціноутворення → `SettingsError`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from checkout_engine.config.config_service import ConfigService
from checkout_engine.domain.currency.interfaces import CurrencyCode
from checkout_engine.domain.delivery.interfaces import CarrierSettings
from checkout_engine.domain.products.entities import (
    NO_SALE,
    AbsolutePrice,
    PriceModifier,
    PriceSpec,
    Product,
    ProductProperty,
    ProductVariantOption,
    SaleWindow,
)
from checkout_engine.domain.settings.checkout_settings import (
    DEFAULT_ENABLED_COUNTRIES,
    DEFAULT_TAX_RATE,
    CategoryTaxRate,
    CheckoutSettings,
    OrderTier,
    PricingType,
    ShippingMethod,
    default_shipping_methods,
)
from checkout_engine.errors.custom_errors import SettingsError
from checkout_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.settings")

Raw = Mapping[str, Any]
_CURRENCIES: Tuple[CurrencyCode, ...] = tuple(CurrencyCode)


# ================================
# 🔢 ПРИМІТИВИ
# ================================
def _decimal(value: Any, *, field: str) -> Optional[Decimal]:
    """'' / None → None; число чи рядок → Decimal; інше → SettingsError."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, ValueError) as exc:
        raise SettingsError(f"Field {field!r} is not a number", details=repr(value)) from exc
    if not result.is_finite():
        raise SettingsError(f"Field {field!r} is not a finite number", details=repr(value))
    return result


def _currency_map(raw: Raw, prefix: str) -> Dict[CurrencyCode, Decimal]:
    """Збирає `{prefix}_omr`, `{prefix}_usd`, `{prefix}_sar` у мапу валюта → сума."""
    result: Dict[CurrencyCode, Decimal] = {}
    for ccy in _CURRENCIES:
        key = f"{prefix}_{ccy.value.lower()}"
        value = _decimal(raw.get(key), field=key)
        if value is not None:
            result[ccy] = value
    return result


def _datetime(value: Any, *, field: str) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"                                 # 🕒 fromisoformat не завжди знає «Z»
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise SettingsError(f"Field {field!r} is not an ISO date", details=repr(value)) from exc


def _sale_window(raw: Raw) -> SaleWindow:
    on_sale = bool(raw.get("on_sale") or raw.get("is_on_sale"))
    if not on_sale:
        return NO_SALE
    return SaleWindow(
        on_sale=True,
        starts_at=_datetime(raw.get("sale_start_date"), field="sale_start_date"),
        ends_at=_datetime(raw.get("sale_end_date"), field="sale_end_date"),
    )


def _codes(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    return tuple(str(v).strip().upper() for v in (values or ()) if str(v).strip())


# ================================
# 📦 КАТАЛОГ
# ================================
def map_price_spec(raw: Raw) -> Optional[PriceSpec]:
    """
    💸 Визначає вид цінової специфікації опції.

    `sale_price_*` без `price_*` поруч із модифікатором дає модифікатор з абсолютною ціною
    розпродажу: поза розпродажем діє дельта, під час розпродажу ціна `sale_price_*`.
    """
    prices = _currency_map(raw, "price")
    sale_prices = _currency_map(raw, "sale_price")
    if prices:
        return AbsolutePrice(prices=prices, sale_prices=sale_prices)

    deltas = _currency_map(raw, "price_modifier")
    if CurrencyCode.OMR not in deltas:
        legacy = _decimal(raw.get("price_modifier"), field="price_modifier")
        if legacy is not None:
            deltas[CurrencyCode.OMR] = legacy
    sale_deltas = _currency_map(raw, "sale_price_modifier")
    if deltas or sale_deltas:
        return PriceModifier(deltas=deltas, sale_deltas=sale_deltas, sale_prices=sale_prices)
    if sale_prices:
        return AbsolutePrice(sale_prices=sale_prices)               # 🔥 Лише ціна розпродажу, база без змін
    return None


def map_option(raw: Raw, property_id: str, index: int) -> ProductVariantOption:
    return ProductVariantOption(
        id=str(raw.get("id") or raw.get("value") or f"{property_id}-{index}"),
        property_id=property_id,
        value=str(raw.get("value") or ""),
        label=str(raw.get("label") or ""),
        label_ar=str(raw.get("label_ar") or ""),
        price_spec=map_price_spec(raw),
        sale=_sale_window(raw),
    )


def map_property(raw: Raw) -> ProductProperty:
    prop_id = str(raw.get("id") or raw.get("name") or "")
    if not prop_id:
        raise SettingsError("Product property has no id", details=repr(dict(raw))[:200])
    return ProductProperty(
        id=prop_id,
        name=str(raw.get("name") or ""),
        name_ar=str(raw.get("name_ar") or ""),
        type=str(raw.get("type") or "select"),
        options=tuple(map_option(opt, prop_id, i) for i, opt in enumerate(raw.get("options") or ())),
    )


def map_product(raw: Raw) -> Product:
    """📦 JSON-запис товару → `Product`."""
    product_id = raw.get("id")
    if not product_id:
        raise SettingsError("Product record has no id")
    return Product(
        id=str(product_id),
        name=str(raw.get("name") or ""),
        category_id=str(raw["category_id"]) if raw.get("category_id") else None,
        prices=_currency_map(raw, "price"),
        sale_prices=_currency_map(raw, "sale_price"),
        sale=_sale_window(raw),
        weight_kg=_decimal(raw.get("weight"), field="weight"),
        properties=tuple(map_property(p) for p in raw.get("properties") or ()),
    )


def map_catalog(records: Iterable[Raw]) -> Dict[str, Product]:
    catalog = {}
    for raw in records:
        product = map_product(raw)
        catalog[product.id] = product
    logger.info("📦 Каталог: %d товар(ів)", len(catalog))
    return catalog


# ================================
# ⚙️ НАЛАШТУВАННЯ CHECKOUT
# ================================
def _rate(value: Any, *, field: str, default: Decimal) -> Decimal:
    rate = _decimal(value, field=field)
    if rate is None:
        return default
    if not Decimal("0") <= rate <= Decimal("1"):
        raise SettingsError(f"{field} must be within [0, 1]", details=str(rate))
    return rate


def map_category_tax_rate(raw: Raw) -> CategoryTaxRate:
    category_id = str(raw.get("category_id") or "")
    if not category_id:
        raise SettingsError("Category tax rate has no category_id")
    return CategoryTaxRate(
        category_id=category_id,
        tax_rate=_rate(raw.get("tax_rate"), field=f"category_tax_rates[{category_id}]", default=DEFAULT_TAX_RATE),
        enabled=bool(raw.get("enabled", True)),
        category_name=str(raw.get("category_name") or ""),
        category_name_ar=str(raw.get("category_name_ar") or ""),
    )


def map_shipping_method(raw: Raw) -> ShippingMethod:
    method_id = str(raw.get("id") or "")
    if not method_id:
        raise SettingsError("Shipping method has no id")
    try:
        pricing_type = PricingType(str(raw.get("pricing_type") or PricingType.FLAT.value))
    except ValueError as exc:
        raise SettingsError(f"Unknown pricing_type for {method_id!r}", details=repr(raw.get("pricing_type"))) from exc

    tiers = tuple(
        OrderTier(
            min_order_value=_decimal(tier.get("min_order_value"), field="min_order_value") or Decimal("0"),
            max_order_value=_decimal(tier.get("max_order_value"), field="max_order_value"),
            costs=_currency_map(tier, "cost"),
        )
        for tier in raw.get("order_tiers") or ()
    )
    return ShippingMethod(
        id=method_id,
        name=str(raw.get("name") or ""),
        name_ar=str(raw.get("name_ar") or ""),
        enabled=bool(raw.get("enabled", True)),
        is_free=bool(raw.get("is_free", False)),
        pricing_type=pricing_type,
        base_costs=_currency_map(raw, "base_cost"),
        cost_per_kg=_currency_map(raw, "cost_per_kg"),
        order_tiers=tiers,
        min_order_value=_decimal(raw.get("min_order_value"), field="min_order_value"),
        max_order_value=_decimal(raw.get("max_order_value"), field="max_order_value"),
        restricted_countries=_codes(raw.get("restricted_countries")),
        estimated_delivery_days=str(raw.get("estimated_delivery_days") or ""),
    )


def map_checkout_settings(raw: Optional[Raw]) -> CheckoutSettings:
    """⚙️ Документ налаштувань магазину → `CheckoutSettings` (порожній → значення за замовчуванням)."""
    raw = raw or {}
    methods_raw = raw.get("shipping_methods")
    methods = (
        tuple(map_shipping_method(m) for m in methods_raw)
        if methods_raw
        else default_shipping_methods()
    )
    enabled = _codes(raw.get("enabled_countries")) or DEFAULT_ENABLED_COUNTRIES
    settings = CheckoutSettings(
        tax_rate=_rate(raw.get("tax_rate"), field="tax_rate", default=DEFAULT_TAX_RATE),
        category_tax_rates=tuple(map_category_tax_rate(c) for c in raw.get("category_tax_rates") or ()),
        enabled_countries=enabled,
        shipping_methods=methods,
    )
    logger.debug(
        "⚙️ Checkout settings | tax=%s categories=%d methods=%d countries=%s",
        settings.tax_rate,
        len(settings.category_tax_rates),
        len(settings.shipping_methods),
        ",".join(settings.enabled_countries),
    )
    return settings


# ================================
# 🚛 ПЕРЕВІЗНИК
# ================================
def map_aramex_settings(raw: Optional[Raw], config: Optional[ConfigService] = None) -> CarrierSettings:
    """
    🚛 Налаштування перевізника з магазину.

    Креденшели беруться з документа (`credentials.*` або плоскі поля), а відсутні
    доповнюються з конфігу (`carrier.aramex.*`, тобто з .env).
    """
    raw = raw or {}
    creds: Raw = raw.get("credentials") or raw
    sender: Raw = raw.get("senderInfo") or {}

    def pick(doc_key: str, config_key: str) -> str:
        value = creds.get(doc_key)
        if not value and config is not None:
            value = config.get(f"carrier.aramex.{config_key}")
        return str(value or "")

    origin_city = config.get("carrier.aramex.origin.city", "") if config is not None else ""
    origin_country = config.get("carrier.aramex.origin.country", "") if config is not None else ""
    return CarrierSettings(
        enabled=bool(raw.get("enabled", False)),
        account_number=pick("accountNumber", "account_number"),
        username=pick("username", "username"),
        password=pick("password", "password"),
        sender_city=str(sender.get("city") or origin_city or ""),
        sender_country=str(sender.get("countryCode") or origin_country or "").upper(),
        services=tuple(str(s) for s in raw.get("services") or ()),
    )


__all__ = [
    "map_price_spec",
    "map_option",
    "map_property",
    "map_product",
    "map_catalog",
    "map_category_tax_rate",
    "map_shipping_method",
    "map_checkout_settings",
    "map_aramex_settings",
]
