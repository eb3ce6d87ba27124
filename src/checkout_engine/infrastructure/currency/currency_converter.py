# 💱 checkout_engine/infrastructure/currency/currency_converter.py
"""
💱 Конвертер на фіксованих множниках відносно базової валюти (OMR).

🔹 Реалізує `IMoneyConverter`: конвертація: чисте множення/ділення без округлення.
🔹 Квантування (OMR: 3 знаки, USD/SAR: 2) виконується окремо і лише на виході.
🔹 Форматує суми для відображення: `$1,234.50`, `1,234.500 ر.ع`, `12.50 ر.س`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging															# 🧾 Логування всіх операцій
from dataclasses import dataclass										# 🧱 Контекст для immutable стану
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP			# 💰 Точна арифметика та округлення
from types import MappingProxyType										# 🧊 Незмінні таблиці
from typing import Any, Mapping, Optional, Union						# 📐 Гнучкі типи вхідних множників

# 🧩 Внутрішні модулі проєкту
from checkout_engine.config.config_service import ConfigService
from checkout_engine.domain.currency.interfaces import (				# 🔗 Контракти домену
    CurrencyCode,
    CurrencyRateNotFoundError,
    IMoneyConverter,
    Money,
)
from checkout_engine.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.infrastructure.currency")


# ================================
# 📏 ТАБЛИЦІ ЗА ЗАМОВЧУВАННЯМ
# ================================
DEFAULT_MULTIPLIERS: Mapping[str, Decimal] = MappingProxyType(
    {"OMR": Decimal("1"), "USD": Decimal("2.6"), "SAR": Decimal("3.75")}
)
DEFAULT_DECIMALS: Mapping[str, int] = MappingProxyType({"OMR": 3, "USD": 2, "SAR": 2})
DEFAULT_SYMBOLS: Mapping[str, str] = MappingProxyType({"OMR": "ر.ع", "USD": "$", "SAR": "ر.س"})
_SYMBOL_FIRST = frozenset({"USD"})										# 💲 Символ перед числом


# ================================
# 🧰 ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_decimal(value: Any) -> Decimal:
    """🧮 Безпечно приводить значення до Decimal через рядкове представлення."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())								# 🧼 Позбавляємося артефактів float
    except (InvalidOperation, AttributeError, ValueError) as exc:
        logger.error("❌ Неможливо привести до Decimal: %r", value)
        raise ValueError(f"Невалідне числове значення: {value!r}") from exc


# ================================
# ⚙️ КОНТЕКСТ ВИКОНАННЯ
# ================================
@dataclass(frozen=True)
class _Ctx:
    """⚙️ Контекст обчислень: множники, точність, символи, округлення."""

    base: CurrencyCode
    multipliers: Mapping[CurrencyCode, Decimal]							# 💱 1 base → N одиниць валюти
    decimals: Mapping[CurrencyCode, int]
    symbols: Mapping[CurrencyCode, str]
    rounding: str


# ================================
# 💱 КОНВЕРТЕР
# ================================
class CurrencyConverter(IMoneyConverter):
    """
    💱 Синхронний конвертер на фіксованих множниках.

    - `convert*` повертають точний (неквантований) Decimal.
    - `quantize` / `format_price` застосовуються лише для відображення.
    """

    def __init__(
        self,
        multipliers: Optional[Mapping[str, Union[Decimal, int, float, str]]] = None,
        *,
        decimals: Optional[Mapping[str, int]] = None,
        symbols: Optional[Mapping[str, str]] = None,
        base: Union[str, CurrencyCode] = CurrencyCode.OMR,
        rounding: str = ROUND_HALF_UP,
    ) -> None:
        base_code = CurrencyCode.parse(base)
        normalized = {}
        for key, value in (multipliers or DEFAULT_MULTIPLIERS).items():
            code = CurrencyCode.parse(key)
            rate = _to_decimal(value)
            if rate <= 0:
                raise ValueError(f"Множник для {code} має бути додатним: {rate}")
            normalized[code] = rate
        normalized[base_code] = Decimal("1")							# 🏦 База завжди 1:1

        digits = {CurrencyCode.parse(k): int(v) for k, v in (decimals or DEFAULT_DECIMALS).items()}
        signs = {CurrencyCode.parse(k): str(v) for k, v in (symbols or DEFAULT_SYMBOLS).items()}

        self._ctx = _Ctx(
            base=base_code,
            multipliers=MappingProxyType(normalized),
            decimals=MappingProxyType(digits),
            symbols=MappingProxyType(signs),
            rounding=rounding,
        )
        logger.debug(
            "💱 CurrencyConverter готовий | base=%s multipliers=%s rounding=%s",
            base_code,
            {str(k): str(v) for k, v in normalized.items()},
            rounding,
        )

    @classmethod
    def from_config(cls, config: ConfigService) -> "CurrencyConverter":
        """🏗️ Будує конвертер із секції `currency` конфігурації."""
        return cls(
            config.get("currency.multipliers") or None,
            decimals=config.get("currency.decimals") or None,
            symbols=config.get("currency.symbols") or None,
            base=config.get("currency.base", "OMR"),
            rounding=config.get("currency.rounding", ROUND_HALF_UP),
        )

    @property
    def base(self) -> CurrencyCode:
        return self._ctx.base

    # ================================
    # 🧮 ТОЧНА КОНВЕРТАЦІЯ
    # ================================
    def _multiplier(self, currency: CurrencyCode) -> Decimal:
        try:
            return self._ctx.multipliers[currency]
        except KeyError as missing:
            raise CurrencyRateNotFoundError(str(self._ctx.base), str(currency)) from missing

    def convert_from_base(self, amount: Union[Decimal, int, str], to_currency: Union[str, CurrencyCode]) -> Decimal:
        """🏦 → 💵 Базова сума × множник (без округлення)."""
        target = CurrencyCode.parse(to_currency)
        return _to_decimal(amount) * self._multiplier(target)

    def convert_to_base(self, amount: Union[Decimal, int, str], from_currency: Union[str, CurrencyCode]) -> Decimal:
        """💵 → 🏦 Сума ÷ множник (без округлення)."""
        source = CurrencyCode.parse(from_currency)
        return _to_decimal(amount) / self._multiplier(source)

    def convert(self, amount: Decimal, from_currency: Union[str, CurrencyCode], to_currency: Union[str, CurrencyCode]) -> Decimal:
        """🔄 Довільна пара валют через базову; однакові валюти повертаються без змін."""
        source = CurrencyCode.parse(from_currency)
        target = CurrencyCode.parse(to_currency)
        value = _to_decimal(amount)
        if source is target:
            return value
        if source is self._ctx.base:
            return self.convert_from_base(value, target)
        if target is self._ctx.base:
            return self.convert_to_base(value, source)
        return value * self._multiplier(target) / self._multiplier(source)

    def convert_money(self, money: Money, to_currency: Union[str, CurrencyCode]) -> Money:
        """💵 Конвертує `Money`; результат неквантований (квантуйте на виході)."""
        target = CurrencyCode.parse(to_currency)
        result = self.convert(money.amount, money.currency, target)
        logger.debug("💵 convert_money: %s %s → %s %s", money.amount, money.currency, result, target)
        return Money(amount=result, currency=target)

    # ================================
    # 📐 КВАНТУВАННЯ ТА ФОРМАТУВАННЯ
    # ================================
    def decimals_for(self, currency: Union[str, CurrencyCode]) -> int:
        return self._ctx.decimals.get(CurrencyCode.parse(currency), 2)

    def quantize(self, amount: Decimal, currency: Union[str, CurrencyCode]) -> Decimal:
        """📐 Округлення до мінорної одиниці валюти (10^-digits)."""
        quantum = Decimal(1).scaleb(-self.decimals_for(currency))
        return _to_decimal(amount).quantize(quantum, rounding=self._ctx.rounding)

    def format_price(self, amount: Union[Decimal, int, str], currency: Union[str, CurrencyCode]) -> str:
        """🏷️ `$1,234.50` для USD; `1,234.500 ر.ع` / `12.50 ر.س` для OMR/SAR."""
        code = CurrencyCode.parse(currency)
        digits = self.decimals_for(code)
        value = self.quantize(_to_decimal(amount), code)
        number = format(abs(value), f",.{digits}f")						# 🇺🇸 en-US групування
        sign = "-" if value < 0 else ""
        symbol = self._ctx.symbols.get(code, str(code))
        if str(code) in _SYMBOL_FIRST:
            return f"{sign}{symbol}{number}"
        return f"{sign}{number} {symbol}"

    def format_money(self, money: Money) -> str:
        return self.format_price(money.amount, money.currency)


__all__ = [
    "CurrencyConverter",
    "DEFAULT_MULTIPLIERS",
    "DEFAULT_DECIMALS",
    "DEFAULT_SYMBOLS",
]
