# 🗂️ checkout_engine/infrastructure/settings/__init__.py
from .mappers import (
    map_aramex_settings,
    map_catalog,
    map_checkout_settings,
    map_price_spec,
    map_product,
    map_shipping_method,
)
from .settings_repository import SettingsRepository

__all__ = [
    "SettingsRepository",
    "map_aramex_settings",
    "map_catalog",
    "map_checkout_settings",
    "map_price_spec",
    "map_product",
    "map_shipping_method",
]
