"""
🧪 test_weight_resolver.py: unit-тести для WeightResolver та розбору міток ваги

Перевіряє:
- Розбір міток обома стратегіями (magnitude / unit_first)
- Ланцюжок fallback-ів: опція → вага товару → дефолт категорії
- Мінімальну вагу перевізника та валідацію межі 50 кг
- Форматування ваги англійською та арабською
"""

from decimal import Decimal

import pytest

from checkout_engine.config.config_service import ConfigService
from checkout_engine.domain.products.entities import CartLine, Product, ProductProperty, ProductVariantOption
from checkout_engine.domain.products.services.weight_resolver import (
    WeightParseStrategy,
    WeightResolver,
    find_weight_property,
    format_weight,
    is_weight_property,
    parse_weight,
)
from checkout_engine.errors.custom_errors import ValidationError


@pytest.mark.parametrize(
    "label, magnitude, unit_first",
    [
        ("250g", "0.25", "0.25"),
        ("1.5 kg", "1.5", "1.5"),
        ("2000g", "2", "2"),
        ("500 جرام", "0.5", "0.5"),
        ("15kg", "0.015", "15"),
        ("1 كجم", "1", "1"),
        ("250", "0.25", "0.25"),
        ("Large", "0", "0"),
    ],
)
def test_parse_weight_strategies(label, magnitude, unit_first):
    assert parse_weight(label) == Decimal(magnitude)
    assert parse_weight(label, WeightParseStrategy.UNIT_FIRST) == Decimal(unit_first)


def test_parse_weight_empty_label():
    assert parse_weight(None) == Decimal("0")
    assert parse_weight("   ") == Decimal("0")


def test_unknown_strategy_defaults_to_magnitude():
    assert WeightParseStrategy.parse("metric") is WeightParseStrategy.MAGNITUDE
    assert WeightParseStrategy.parse("UNIT_FIRST") is WeightParseStrategy.UNIT_FIRST


def test_weight_property_detection(coffee):
    assert find_weight_property(coffee).id == "weight"
    assert is_weight_property(ProductProperty(id="x", name="Colour", name_ar="حجم الكيس")) is True
    assert is_weight_property(ProductProperty(id="y", name="Weight", type="select")) is False


def test_line_weight_from_selected_option(weights, coffee):
    assert weights.resolve_line_weight(CartLine("coffee-1", 1, {"weight": "w1000"}), coffee) == Decimal("1")


def test_line_weight_defaults_to_first_option(weights, coffee):
    assert weights.resolve_line_weight(CartLine("coffee-1"), coffee) == Decimal("0.25")


def test_unparseable_option_falls_back_to_product_weight(weights):
    prop = ProductProperty(
        id="size",
        name="Size",
        type="size",
        options=(ProductVariantOption(id="l", property_id="size", value="Large"),),
    )
    product = Product(id="p", weight_kg="0.7", properties=(prop,))
    assert weights.resolve_line_weight(CartLine("p"), product) == Decimal("0.7")


@pytest.mark.parametrize(
    "category, expected",
    [("coffee-beans", "0.25"), ("capsules", "0.1"), ("equipment", "1.0"), ("unknown", "0.5"), (None, "0.5")],
)
def test_category_default(weights, category, expected):
    product = Product(id="p", category_id=category)
    assert weights.resolve_line_weight(CartLine("p"), product) == Decimal(expected)


def test_missing_product_uses_default(weights):
    assert weights.resolve_line_weight(CartLine("ghost"), None) == Decimal("0.5")


def test_total_cart_weight(weights, coffee, mug):
    catalog = {coffee.id: coffee, mug.id: mug}
    lines = [CartLine("coffee-1", 2, {"weight": "w1000"}), CartLine("mug-1", 3), CartLine("ghost", 1)]
    assert weights.total_cart_weight(lines, catalog) == Decimal("2") + Decimal("1.2") + Decimal("0.5")


def test_shipping_weight_applies_carrier_minimum(weights):
    assert weights.shipping_weight(Decimal("0.05")) == Decimal("0.1")
    assert weights.shipping_weight(Decimal("3.2")) == Decimal("3.2")


def test_validate_for_shipping(weights):
    assert weights.validate_for_shipping(Decimal("50")) == Decimal("50")
    with pytest.raises(ValidationError) as heavy:
        weights.validate_for_shipping(Decimal("50.01"))
    assert heavy.value.reason == "too-heavy"
    with pytest.raises(ValidationError) as empty:
        weights.validate_for_shipping(Decimal("0"))
    assert empty.value.field == "weight"
    assert weights.is_shippable(Decimal("-1")) is False


def test_from_config_reads_strategy():
    config = ConfigService(overrides={"weight.parse_strategy": "unit_first"}, load_env=False)
    resolver = WeightResolver.from_config(config)
    assert resolver.strategy is WeightParseStrategy.UNIT_FIRST
    assert resolver.category_default_weight("Capsules") == Decimal("0.1")


@pytest.mark.parametrize(
    "kg, lang, expected",
    [
        ("1.5", "en", "1.5 kg"),
        ("0.25", "en", "250 g"),
        ("2", "ar", "2.0 كيلوجرام"),
        ("0.5", "ar", "500 جرام"),
    ],
)
def test_format_weight(kg, lang, expected):
    assert format_weight(Decimal(kg), lang) == expected


def test_describe_line_weight(weights, coffee, mug):
    assert weights.describe_line_weight(CartLine("coffee-1", 1, {"weight": "w1000"}), coffee) == "1 kg"
    assert weights.describe_line_weight(CartLine("mug-1"), mug) == "400 g"
