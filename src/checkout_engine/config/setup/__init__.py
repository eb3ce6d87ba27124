# 📦 checkout_engine/config/setup/__init__.py
"""
⚙️ Збірка компонентів ядра checkout перед використанням.
"""

from .container import Container, bootstrap_logging

__all__ = ["Container", "bootstrap_logging"]
