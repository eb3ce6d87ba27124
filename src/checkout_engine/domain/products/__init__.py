# 🧩 checkout_engine/domain/products/__init__.py
"""
🧩 Пакет `domain.products` публікує сутності каталогу/кошика та сервіс ваги.

🔹 `entities.py`: `Product`, `ProductProperty`, `ProductVariantOption`, `CartLine`, `PriceSpec`.
🔹 `services`: `WeightResolver` і розбір міток ваги.
"""

# 🧩 Внутрішні модулі проєкту
from .entities import (                                        # 🧱 Базові сутності
    AbsolutePrice,
    CartLine,
    NO_SALE,
    PriceKind,
    PriceModifier,
    PriceSpec,
    Product,
    ProductProperty,
    ProductVariantOption,
    SaleWindow,
)
from .services import WeightParseStrategy, WeightResolver, parse_weight   # ⚖️ Вага


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    "AbsolutePrice",
    "CartLine",
    "NO_SALE",
    "PriceKind",
    "PriceModifier",
    "PriceSpec",
    "Product",
    "ProductProperty",
    "ProductVariantOption",
    "SaleWindow",
    "WeightParseStrategy",
    "WeightResolver",
    "parse_weight",
]
