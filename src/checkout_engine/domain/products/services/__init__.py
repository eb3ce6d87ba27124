# ⚖️ checkout_engine/domain/products/services/__init__.py
from .weight_resolver import (
    DEFAULT_CATEGORY_WEIGHTS,
    MAX_SHIPPING_KG,
    MIN_SHIPPING_KG,
    WeightParseStrategy,
    WeightResolver,
    find_weight_property,
    format_weight,
    is_weight_property,
    parse_weight,
    selected_weight_option,
)

__all__ = [
    "DEFAULT_CATEGORY_WEIGHTS",
    "MAX_SHIPPING_KG",
    "MIN_SHIPPING_KG",
    "WeightParseStrategy",
    "WeightResolver",
    "find_weight_property",
    "format_weight",
    "is_weight_property",
    "parse_weight",
    "selected_weight_option",
]
