# 💸 checkout_engine/domain/pricing/__init__.py
"""
💸 Пакет `domain.pricing`: ціна рядка кошика з урахуванням опцій і розпродажів.
"""

from .interfaces import IPricingResolver, LinePrice          # 📐 Контракт і DTO
from .services import PricingResolver                        # 🏛️ Реалізація

__all__ = ["IPricingResolver", "LinePrice", "PricingResolver"]
