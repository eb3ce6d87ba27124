# 💱 checkout_engine/infrastructure/currency/__init__.py
from .currency_converter import CurrencyConverter, DEFAULT_DECIMALS, DEFAULT_MULTIPLIERS, DEFAULT_SYMBOLS

__all__ = ["CurrencyConverter", "DEFAULT_DECIMALS", "DEFAULT_MULTIPLIERS", "DEFAULT_SYMBOLS"]
