"""
🧪 test_currency_converter.py: unit-тести для CurrencyConverter

Перевіряє:
- Точну конвертацію через базову валюту без округлення
- Квантування до мінорної одиниці (OMR: 3 знаки, USD/SAR: 2)
- Обмежену похибку round-trip після квантування
- Форматування сум для відображення
"""

from decimal import Decimal

import pytest

from checkout_engine.domain.currency.interfaces import CurrencyCode, CurrencyRateNotFoundError, Money
from checkout_engine.infrastructure.currency.currency_converter import CurrencyConverter


def test_convert_from_base_is_exact(converter):
    assert converter.convert_from_base(Decimal("5.000"), "USD") == Decimal("13.0000")
    assert converter.convert_from_base(Decimal("2"), CurrencyCode.SAR) == Decimal("7.50")


def test_convert_to_base_is_not_quantized(converter):
    result = converter.convert_to_base(Decimal("10"), "USD")
    assert result == Decimal("10") / Decimal("2.6")
    assert converter.quantize(result, "OMR") == Decimal("3.846")


def test_convert_same_currency_returns_value(converter):
    assert converter.convert(Decimal("1.23456"), "SAR", "SAR") == Decimal("1.23456")


def test_convert_cross_pair_goes_through_base(converter):
    result = converter.convert(Decimal("26"), "USD", "SAR")
    assert result == Decimal("37.5")


def test_convert_money(converter):
    money = converter.convert_money(Money(Decimal("2"), "OMR"), "USD")
    assert money.currency is CurrencyCode.USD
    assert money.amount == Decimal("5.2")


@pytest.mark.parametrize(
    "amount, currency, expected",
    [
        ("1.0005", "OMR", Decimal("1.001")),
        ("1.0004", "OMR", Decimal("1.000")),
        ("2.345", "USD", Decimal("2.35")),
        ("19.494", "SAR", Decimal("19.49")),
    ],
)
def test_quantize_half_up(converter, amount, currency, expected):
    assert converter.quantize(Decimal(amount), currency) == expected


@pytest.mark.parametrize("currency", ["USD", "SAR"])
@pytest.mark.parametrize("base_amount", ["0.001", "1.234", "5.000", "99.999", "1234.567"])
def test_round_trip_error_is_bounded(converter, currency, base_amount):
    original = Decimal(base_amount)
    shown = converter.quantize(converter.convert_from_base(original, currency), currency)
    back = converter.quantize(converter.convert_to_base(shown, currency), "OMR")
    multiplier = {"USD": Decimal("2.6"), "SAR": Decimal("3.75")}[currency]
    assert abs(back - original) <= Decimal("0.005") / multiplier + Decimal("0.0005")


def test_unknown_currency_raises(converter):
    with pytest.raises(CurrencyRateNotFoundError):
        converter.convert(Decimal("1"), "OMR", "EUR")


def test_non_positive_multiplier_rejected():
    with pytest.raises(ValueError):
        CurrencyConverter({"USD": "0"})


def test_from_config_reads_currency_section(config):
    converter = CurrencyConverter.from_config(config)
    assert converter.base is CurrencyCode.OMR
    assert converter.decimals_for("OMR") == 3
    assert converter.convert_from_base(Decimal("1"), "SAR") == Decimal("3.75")


@pytest.mark.parametrize(
    "amount, currency, expected",
    [
        ("1234.5", "USD", "$1,234.50"),
        ("1234.5", "OMR", "1,234.500 ر.ع"),
        ("12.5", "SAR", "12.50 ر.س"),
        ("-3.1", "USD", "-$3.10"),
    ],
)
def test_format_price(converter, amount, currency, expected):
    assert converter.format_price(Decimal(amount), currency) == expected


def test_format_money(converter):
    assert converter.format_money(Money(Decimal("5"), "OMR")) == "5.000 ر.ع"
