# 🚚 checkout_engine/domain/delivery/__init__.py
"""
🚚 Пакет `domain.delivery`: географія, валідація пункту призначення, сесія котирувань.
"""

from .interfaces import (
    CarrierSettings,
    City,
    Country,
    IRateProvider,
    QuoteState,
    RateRequest,
    RateResult,
    RateStatus,
    ShippingDestination,
    State,
    ValidationReason,
    ValidationResult,
)
from .location_validator import DestinationSelector, GeographyTable, LocationValidator
from .rate_quoter import DEFAULT_ORIGIN, Origin, RateQuoteSession, is_carrier_available

__all__ = [
    "CarrierSettings",
    "City",
    "Country",
    "IRateProvider",
    "QuoteState",
    "RateRequest",
    "RateResult",
    "RateStatus",
    "ShippingDestination",
    "State",
    "ValidationReason",
    "ValidationResult",
    "DestinationSelector",
    "GeographyTable",
    "LocationValidator",
    "DEFAULT_ORIGIN",
    "Origin",
    "RateQuoteSession",
    "is_carrier_available",
]
