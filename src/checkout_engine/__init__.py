# 🛒 checkout_engine/__init__.py
"""
🛒 checkout_engine: ціноутворення кошика та розрахунок доставки.

🔹 Ціни рядків у OMR / USD / SAR з опціями та розпродажами.
🔹 Вага кошика, податок за категоріями, тарифи перевізника з фенсингом застарілих відповідей.
🔹 Підсумок замовлення, що ніколи не підставляє нуль замість невідомої доставки.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
