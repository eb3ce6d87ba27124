# ⚙️ checkout_engine/domain/settings/__init__.py
"""
⚙️ Пакет `domain.settings`: налаштування магазину, які ядро отримує лише для читання.
"""

from .checkout_settings import (
    DEFAULT_ENABLED_COUNTRIES,
    DEFAULT_TAX_RATE,
    CategoryTaxRate,
    CheckoutSettings,
    OrderTier,
    PricingType,
    ShippingMethod,
    default_checkout_settings,
    default_shipping_methods,
)

__all__ = [
    "DEFAULT_ENABLED_COUNTRIES",
    "DEFAULT_TAX_RATE",
    "CategoryTaxRate",
    "CheckoutSettings",
    "OrderTier",
    "PricingType",
    "ShippingMethod",
    "default_checkout_settings",
    "default_shipping_methods",
]
