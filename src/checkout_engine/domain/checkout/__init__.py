# 🧮 checkout_engine/domain/checkout/__init__.py
"""
🧮 Пакет `domain.checkout`: агрегація підсумку замовлення.
"""

from .interfaces import IncompleteReason, OrderTotal, ShippingResolution
from .services import CheckoutAggregator

__all__ = ["IncompleteReason", "OrderTotal", "ShippingResolution", "CheckoutAggregator"]
