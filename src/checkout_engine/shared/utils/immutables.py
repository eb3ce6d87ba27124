# 🧊 checkout_engine/shared/utils/immutables.py
"""
🧊 «Заморожування» довідкових структур: таблиця географії, карти цін, налаштування.

🔹 dict → MappingProxyType, list/tuple → tuple, set → frozenset (рекурсивно).
🔹 Після `freeze` довідник безпечно читати з будь-якої корутини без блокувань.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Mapping                      # 🧰 Перевірка мап
from datetime import date, datetime                      # 📅 Дати продажів лишаються як є
from decimal import Decimal                              # 💵 Грошові значення
from enum import Enum                                    # 🏷️ Коди валют
from types import MappingProxyType                       # 🔒 Незмінна обгортка над dict
from typing import Any, Dict, Optional

# ================================
# 🧾 АЛІАСИ
# ================================
FrozenMapping = MappingProxyType

_SCALARS = (str, bytes, int, float, bool, Decimal, Enum, date, datetime)


# ================================
# ❄️ ЗАМОРОЖУВАЧ СТРУКТУР
# ================================
def freeze(obj: Any) -> Any:
    """Рекурсивно перетворює колекції на незмінні аналоги; скаляри повертає без змін."""
    if obj is None or isinstance(obj, _SCALARS):
        return obj
    if isinstance(obj, Mapping):
        return MappingProxyType({key: freeze(value) for key, value in obj.items()})
    if isinstance(obj, (set, frozenset)):
        return frozenset(freeze(value) for value in obj)
    if isinstance(obj, (list, tuple)):
        return tuple(freeze(value) for value in obj)
    return obj                                            # ⚖️ Dataclass-и та інші обʼєкти не чіпаємо


def frozen_mapping(data: Optional[Mapping[Any, Any]] = None) -> "MappingProxyType[Any, Any]":
    """Поверхнева незмінна копія мапи (порожня, якщо `data` не задано)."""
    copy: Dict[Any, Any] = dict(data or {})
    return MappingProxyType(copy)


# ================================
# 🔍 ПЕРЕВІРКИ
# ================================
def is_frozen_mapping(obj: Any) -> bool:
    return isinstance(obj, MappingProxyType)


__all__ = ["FrozenMapping", "freeze", "frozen_mapping", "is_frozen_mapping"]
