# 🧰 checkout_engine/shared/utils/__init__.py
"""
🧰 Спільні утиліти: логування та незмінні структури.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

# 🧊 Незмінні структури
from .immutables import FrozenMapping, freeze, frozen_mapping, is_frozen_mapping

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    "FrozenMapping",
    "freeze",
    "frozen_mapping",
    "is_frozen_mapping",
]
