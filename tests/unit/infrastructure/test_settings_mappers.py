"""
🧪 test_settings_mappers.py: unit-тести для маперів налаштувань і SettingsRepository

Перевіряє:
- Визначення виду цінової специфікації опції (абсолютна / модифікатор / без впливу)
- Legacy-поле price_modifier трактується як OMR
- Вікна розпродажу з ISO-дат (включно з «Z»)
- Способи доставки, ставки податку та помилки SettingsError
- Креденшели перевізника з документа та з конфігу
- Асинхронне читання JSON через aiofiles
"""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from checkout_engine.config.config_service import ConfigService
from checkout_engine.domain.currency.interfaces import CurrencyCode
from checkout_engine.domain.products.entities import AbsolutePrice, PriceModifier
from checkout_engine.domain.settings.checkout_settings import PricingType
from checkout_engine.errors.custom_errors import SettingsError
from checkout_engine.infrastructure.settings.mappers import (
    map_aramex_settings,
    map_checkout_settings,
    map_price_spec,
    map_product,
    map_shipping_method,
)
from checkout_engine.infrastructure.settings.settings_repository import SettingsRepository

OMR = CurrencyCode.OMR
USD = CurrencyCode.USD

PRODUCT_RAW = {
    "id": "rec_1",
    "name": "Colombia Huila",
    "category_id": "coffee-beans",
    "price_omr": 5,
    "price_usd": "13.50",
    "sale_price_omr": 4.5,
    "is_on_sale": True,
    "sale_start_date": "2025-01-01T00:00:00Z",
    "sale_end_date": "2025-12-31T23:59:59Z",
    "weight": "0.25",
    "properties": [
        {
            "id": "size",
            "name": "Weight",
            "name_ar": "الوزن",
            "type": "size",
            "options": [
                {"value": "250g", "label": "250 g", "label_ar": "250 جرام"},
                {"value": "1kg", "label": "1 kg", "price_omr": 10, "sale_price_omr": 8, "on_sale": True},
                {"value": "500g", "price_modifier": 2.5, "sale_price_modifier_omr": 2},
            ],
        }
    ],
}


def test_price_spec_kinds():
    assert map_price_spec({"value": "x"}) is None
    absolute = map_price_spec({"price_omr": "10", "sale_price_omr": "8"})
    assert isinstance(absolute, AbsolutePrice)
    assert absolute.prices[OMR] == Decimal("10")
    assert absolute.sale_prices[OMR] == Decimal("8")
    modifier = map_price_spec({"price_modifier_omr": "1.5", "price_modifier_usd": "3.90"})
    assert isinstance(modifier, PriceModifier)
    assert modifier.deltas[USD] == Decimal("3.90")


def test_legacy_modifier_is_omr():
    spec = map_price_spec({"price_modifier": 2.5})
    assert spec.deltas == {OMR: Decimal("2.5")}


def test_explicit_omr_modifier_wins_over_legacy():
    spec = map_price_spec({"price_modifier": 9, "price_modifier_omr": 1})
    assert spec.deltas[OMR] == Decimal("1")


def test_map_product():
    product = map_product(PRODUCT_RAW)
    assert product.prices[USD] == Decimal("13.50")
    assert product.sale_prices[OMR] == Decimal("4.5")
    assert product.sale.on_sale is True
    assert product.sale.starts_at == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert product.weight_kg == Decimal("0.25")
    options = product.properties[0].options
    assert [o.id for o in options] == ["250g", "1kg", "500g"]
    assert options[0].price_spec is None
    assert isinstance(options[1].price_spec, AbsolutePrice)
    assert options[1].sale.on_sale is True
    assert isinstance(options[2].price_spec, PriceModifier)
    assert options[2].price_spec.sale_deltas[OMR] == Decimal("2")


SALE_ONLY_OPTION_RAW = {
    "id": "rec_2",
    "category_id": "coffee-beans",
    "price_omr": "5.000",
    "properties": [
        {
            "id": "size",
            "type": "size",
            "options": [
                {"value": "500g", "price_modifier_omr": "0.5", "sale_price_omr": "4", "on_sale": True},
                {"value": "1kg", "sale_price_omr": "7", "on_sale": True},
            ],
        }
    ],
}


def test_option_sale_price_without_regular_price():
    options = map_product(SALE_ONLY_OPTION_RAW).properties[0].options
    with_modifier, sale_only = options[0].price_spec, options[1].price_spec
    assert isinstance(with_modifier, PriceModifier)
    assert with_modifier.deltas[OMR] == Decimal("0.5")
    assert with_modifier.sale_prices[OMR] == Decimal("4")
    assert isinstance(sale_only, AbsolutePrice)
    assert dict(sale_only.prices) == {}
    assert sale_only.sale_prices[OMR] == Decimal("7")


def test_option_sale_price_is_used_by_pricing(pricing, now):
    product = map_product(SALE_ONLY_OPTION_RAW)
    line = pricing.resolve_line_price(product, {"size": "500g"}, "OMR", quantity=2, now=now)
    assert line.unit_price.amount == Decimal("4.000")
    assert line.total.amount == Decimal("8.000")
    assert line.on_sale is True
    assert line.original_unit_price.amount == Decimal("5.500")

    sale_only = pricing.resolve_line_price(product, {"size": "1kg"}, "OMR", now=now)
    assert sale_only.unit_price.amount == Decimal("7.000")
    assert sale_only.original_unit_price.amount == Decimal("5.000")


def test_option_modifier_applies_when_sale_is_off(pricing, now):
    raw = dict(SALE_ONLY_OPTION_RAW)
    raw["properties"] = [
        {"id": "size", "options": [{"value": "500g", "price_modifier_omr": "0.5", "sale_price_omr": "4"}]}
    ]
    line = pricing.resolve_line_price(map_product(raw), {"size": "500g"}, "OMR", now=now)
    assert line.unit_price.amount == Decimal("5.500")
    assert line.on_sale is False


def test_map_product_rejects_bad_values():
    with pytest.raises(SettingsError):
        map_product({"name": "no id"})
    with pytest.raises(SettingsError):
        map_product({"id": "x", "price_omr": "abc"})
    with pytest.raises(SettingsError):
        map_product({"id": "x", "on_sale": True, "sale_end_date": "tomorrow"})


def test_map_checkout_settings_defaults():
    settings = map_checkout_settings(None)
    assert settings.tax_rate == Decimal("0.1")
    assert settings.enabled_countries == ("OM", "AE", "SA", "KW", "IQ")
    assert [m.id for m in settings.shipping_methods] == ["pickup", "nool_oman"]


def test_map_checkout_settings_full_document():
    settings = map_checkout_settings(
        {
            "tax_rate": 0.05,
            "enabled_countries": ["om", "ae"],
            "category_tax_rates": [
                {"category_id": "coffee-beans", "tax_rate": 0, "enabled": True},
                {"category_id": "equipment", "tax_rate": "0.15", "enabled": False},
            ],
            "shipping_methods": [
                {
                    "id": "tiers",
                    "pricing_type": "order_based",
                    "order_tiers": [
                        {"min_order_value": 0, "max_order_value": 20, "cost_omr": 2},
                        {"min_order_value": 20, "cost_omr": 0},
                    ],
                    "restricted_countries": ["iq"],
                },
                {"id": "aramex", "pricing_type": "api_calculated", "enabled": False},
            ],
        }
    )
    assert settings.tax_rate == Decimal("0.05")
    assert settings.enabled_countries == ("OM", "AE")
    assert settings.category_tax_rates[1].enabled is False
    tiers = settings.method("tiers")
    assert tiers.pricing_type is PricingType.ORDER_BASED
    assert tiers.order_tiers[0].costs[OMR] == Decimal("2")
    assert tiers.order_tiers[1].max_order_value is None
    assert tiers.allows_country("IQ") is False
    assert settings.method("aramex").enabled is False


def test_map_shipping_method_weight_based():
    method = map_shipping_method(
        {"id": "kg", "pricing_type": "weight_based", "base_cost_omr": 1, "cost_per_kg_omr": "0.5", "is_free": False}
    )
    assert method.base_costs[OMR] == Decimal("1")
    assert method.cost_per_kg[OMR] == Decimal("0.5")


@pytest.mark.parametrize(
    "raw",
    [
        {"tax_rate": 1.5},
        {"category_tax_rates": [{"category_id": "x", "tax_rate": -0.1}]},
        {"shipping_methods": [{"id": "m", "pricing_type": "teleport"}]},
        {"shipping_methods": [{"pricing_type": "flat"}]},
    ],
)
def test_map_checkout_settings_errors(raw):
    with pytest.raises(SettingsError):
        map_checkout_settings(raw)


def test_map_aramex_settings_from_document():
    carrier = map_aramex_settings(
        {
            "enabled": True,
            "accountNumber": "60531487",
            "username": "shop@example.com",
            "password": "secret",
            "senderInfo": {"city": "Muscat", "countryCode": "om"},
        }
    )
    assert carrier.is_available is True
    assert carrier.sender_country == "OM"


def test_map_aramex_settings_fills_credentials_from_config():
    config = ConfigService(
        overrides={
            "carrier.aramex.account_number": "111",
            "carrier.aramex.username": "env-user",
            "carrier.aramex.password": "env-pass",
        },
        load_env=False,
    )
    carrier = map_aramex_settings({"enabled": True, "credentials": {"username": "doc-user"}}, config)
    assert carrier.username == "doc-user"
    assert carrier.account_number == "111"
    assert carrier.sender_city == "Muscat"
    assert carrier.is_available is True


def test_map_aramex_settings_disabled_by_default():
    assert map_aramex_settings(None).is_available is False


# ================================
# 💾 РЕПОЗИТОРІЙ
# ================================
@pytest.mark.asyncio
async def test_repository_reads_documents(tmp_path):
    (tmp_path / "products.json").write_text(json.dumps({"products": [PRODUCT_RAW]}), encoding="utf-8")
    (tmp_path / "checkout_settings.json").write_text(json.dumps({"tax_rate": 0.2}), encoding="utf-8")
    (tmp_path / "aramex_settings.json").write_text(json.dumps({"enabled": False}), encoding="utf-8")

    repo = SettingsRepository(base_dir=tmp_path)
    catalog = await repo.load_catalog()
    settings = await repo.load_checkout_settings()
    carrier = await repo.load_aramex_settings()

    assert list(catalog) == ["rec_1"]
    assert settings.tax_rate == Decimal("0.2")
    assert carrier.enabled is False


@pytest.mark.asyncio
async def test_repository_missing_files_use_defaults(tmp_path):
    repo = SettingsRepository(base_dir=tmp_path)
    assert await repo.load_catalog() == {}
    assert (await repo.load_checkout_settings()).method("pickup") is not None
    assert (await repo.load_aramex_settings()).is_available is False


@pytest.mark.asyncio
async def test_repository_malformed_json(tmp_path):
    (tmp_path / "checkout_settings.json").write_text("{broken", encoding="utf-8")
    with pytest.raises(SettingsError):
        await SettingsRepository(base_dir=tmp_path).load_checkout_settings()


@pytest.mark.asyncio
async def test_repository_accepts_plain_product_list(tmp_path):
    (tmp_path / "products.json").write_text(json.dumps([PRODUCT_RAW]), encoding="utf-8")
    catalog = await SettingsRepository(base_dir=tmp_path).load_catalog()
    assert catalog["rec_1"].category_id == "coffee-beans"
