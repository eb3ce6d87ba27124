# 💱 checkout_engine/domain/currency/interfaces.py
"""
💱 Контракти валютного шару: коди валют, `Money`, протокол конвертера.

🔹 Базова валюта: OMR; USD та SAR виводяться фіксованими множниками.
🔹 Уся арифметика: Decimal; округлення відокремлене від конвертації.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Protocol, Union


class CurrencyCode(str, Enum):
    """Підтримувані валюти відображення."""

    OMR = "OMR"                      # 🇴🇲 Базова валюта, 3 знаки
    USD = "USD"
    SAR = "SAR"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union[str, "CurrencyCode"]) -> "CurrencyCode":
        """'usd' / ' USD ' / CurrencyCode.USD → CurrencyCode.USD."""
        if isinstance(value, CurrencyCode):
            return value
        try:
            return cls(str(value or "").strip().upper())
        except ValueError as exc:
            raise CurrencyRateNotFoundError(str(value), "OMR") from exc


@dataclass(frozen=True, slots=True)
class Money:
    """💵 Сума у конкретній валюті."""

    amount: Decimal
    currency: CurrencyCode

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        object.__setattr__(self, "currency", CurrencyCode.parse(self.currency))

    def __add__(self, other: "Money") -> "Money":
        if other.currency is not self.currency:
            raise ValueError(f"Cannot add {other.currency} to {self.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: Union[int, Decimal]) -> "Money":
        return Money(self.amount * Decimal(factor), self.currency)

    @classmethod
    def zero(cls, currency: Union[str, CurrencyCode]) -> "Money":
        return cls(Decimal("0"), CurrencyCode.parse(currency))


class CurrencyRateNotFoundError(LookupError):
    """🚫 Для валюти немає множника."""

    def __init__(self, from_currency: str, to_currency: str) -> None:
        super().__init__(f"No conversion rate {from_currency} → {to_currency}")
        self.from_currency = from_currency
        self.to_currency = to_currency


class IMoneyConverter(Protocol):
    """💱 Точна (неокруглена) конвертація та окреме квантування."""

    def convert(self, amount: Decimal, from_currency: CurrencyCode, to_currency: CurrencyCode) -> Decimal:
        ...

    def convert_money(self, money: Money, to_currency: CurrencyCode) -> Money:
        ...

    def quantize(self, amount: Decimal, currency: CurrencyCode) -> Decimal:
        ...


__all__ = [
    "CurrencyCode",
    "Money",
    "CurrencyRateNotFoundError",
    "IMoneyConverter",
]
