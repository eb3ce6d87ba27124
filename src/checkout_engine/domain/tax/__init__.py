# 🧾 checkout_engine/domain/tax/__init__.py
from .services import TaxEngine

__all__ = ["TaxEngine"]
