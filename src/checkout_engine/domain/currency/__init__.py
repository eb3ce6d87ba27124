# 💱 checkout_engine/domain/currency/__init__.py
"""
💱 Пакет `domain.currency` публікує контракти та DTO для валютних операцій.

🔹 `interfaces.py` містить `CurrencyCode`, `Money`, виняток `CurrencyRateNotFoundError`
    та протокол `IMoneyConverter` (Decimal API).
"""

# 🧩 Внутрішні модулі проєкту
from .interfaces import (
    CurrencyCode,                # 🔤 OMR / USD / SAR
    Money,                       # 💵 DTO для сум на базі Decimal
    CurrencyRateNotFoundError,   # 🚫 Виняток, якщо множник відсутній
    IMoneyConverter,             # 💵 Контракт конвертера
)


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    "CurrencyCode",
    "Money",
    "CurrencyRateNotFoundError",
    "IMoneyConverter",
]
