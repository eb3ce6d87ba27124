# 🚨 checkout_engine/errors/__init__.py
"""🚨 Винятки ядра та стратегії їх класифікації."""

from .custom_errors import (
    AppError,
    ErrorCode,
    PricingDataError,
    ProviderError,
    SettingsError,
    StaleResultDiscarded,
    UserVisibleError,
    ValidationError,
)
from .strategies import HttpxErrorStrategy, IErrorHandlingStrategy, is_transient_status

__all__ = [
    "AppError",
    "ErrorCode",
    "PricingDataError",
    "ProviderError",
    "SettingsError",
    "StaleResultDiscarded",
    "UserVisibleError",
    "ValidationError",
    "HttpxErrorStrategy",
    "IErrorHandlingStrategy",
    "is_transient_status",
]
