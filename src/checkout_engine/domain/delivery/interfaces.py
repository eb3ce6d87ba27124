# 🚚 checkout_engine/domain/delivery/interfaces.py
"""
🚚 Контракти доставки: пункт призначення, географія, запит/результат тарифу, провайдер.

🔹 `ShippingDestination`: країна → регіон → місто.
🔹 `RateRequest` / `RateResult`: форма запиту до перевізника та класифікований результат.
🔹 `IRateProvider`: асинхронний провайдер тарифів (httpx-клієнт або фейк у тестах).
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.currency.interfaces import Money


# ================================
# 📍 ПУНКТ ПРИЗНАЧЕННЯ
# ================================
@dataclass(frozen=True, slots=True)
class ShippingDestination:
    country: str = ""                      # 🌍 ISO-код країни (OM, AE, ...)
    state: str = ""                        # 🗺️ Код регіону (MA, DU, ...)
    city: str = ""                         # 🏙️ Назва міста (англ.)

    def __post_init__(self) -> None:
        object.__setattr__(self, "country", (self.country or "").strip().upper())
        object.__setattr__(self, "state", (self.state or "").strip().upper())
        object.__setattr__(self, "city", (self.city or "").strip())

    @property
    def is_complete(self) -> bool:
        return bool(self.country and self.state and self.city)

    def same_place(self, other: Optional["ShippingDestination"]) -> bool:
        """Порівняння без урахування регістру міста."""
        if other is None:
            return False
        return (
            self.country == other.country
            and self.state == other.state
            and self.city.lower() == other.city.lower()
        )


# ================================
# 🗺️ ГЕОГРАФІЯ
# ================================
@dataclass(frozen=True, slots=True)
class City:
    name: str
    name_ar: str = ""


@dataclass(frozen=True, slots=True)
class State:
    code: str
    name: str
    name_ar: str = ""
    cities: Tuple[City, ...] = ()

    def find_city(self, name: str) -> Optional[City]:
        wanted = (name or "").strip().lower()
        for city in self.cities:
            if city.name.lower() == wanted:
                return city
        return None


@dataclass(frozen=True, slots=True)
class Country:
    code: str
    name: str
    name_ar: str = ""
    currency: str = ""
    states: Tuple[State, ...] = ()

    def find_state(self, code: str) -> Optional[State]:
        wanted = (code or "").strip().upper()
        for state in self.states:
            if state.code == wanted:
                return state
        return None


class ValidationReason(str, Enum):
    """Машиночитні причини відхилення пункту призначення."""

    MISSING_COUNTRY = "missing-country"
    UNSUPPORTED_COUNTRY = "unsupported-country"
    COUNTRY_NOT_ENABLED = "country-not-enabled"
    MISSING_STATE = "missing-state"
    UNKNOWN_STATE = "unknown-state"
    MISSING_CITY = "missing-city"
    CITY_NOT_IN_STATE = "city-not-in-state"
    NOT_SERVICEABLE = "not-serviceable"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    reason: Optional[ValidationReason] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.valid


# ================================
# 🚛 ПЕРЕВІЗНИК
# ================================
@dataclass(frozen=True, slots=True)
class CarrierSettings:
    """Налаштування перевізника з магазину (креденшели, відправник, перемикач)."""

    enabled: bool = False
    account_number: str = ""
    username: str = ""
    password: str = ""
    sender_city: str = ""
    sender_country: str = ""
    services: Tuple[str, ...] = ()

    @property
    def is_available(self) -> bool:
        """Увімкнено, є креденшели та адреса відправника."""
        return bool(
            self.enabled
            and self.account_number
            and self.username
            and self.password
            and self.sender_city
            and self.sender_country
        )


@dataclass(frozen=True, slots=True)
class RateRequest:
    origin_city: str
    origin_country: str
    dest_city: str
    dest_country: str
    weight_kg: Decimal
    dimensions: Optional[Mapping[str, Decimal]] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON-тіло для провайдера тарифів."""
        payload: Dict[str, Any] = {
            "originCity": self.origin_city,
            "originCountry": self.origin_country,
            "destCity": self.dest_city,
            "destCountry": self.dest_country,
            "weight": float(self.weight_kg),
        }
        if self.dimensions:
            payload["dimensions"] = {key: float(value) for key, value in self.dimensions.items()}
        return payload


class IRateProvider(Protocol):
    """Повертає тариф або піднімає `ProviderError`."""

    async def fetch_rate(self, request: RateRequest) -> Money:
        ...


# ================================
# 📬 РЕЗУЛЬТАТ КОТИРУВАННЯ
# ================================
class RateStatus(str, Enum):
    OK = "ok"
    INVALID_DESTINATION = "invalid-destination"
    INVALID_WEIGHT = "invalid-weight"
    PROVIDER_ERROR = "provider-error"
    STALE = "stale"


class QuoteState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    INVALID = "invalid"
    CALCULATING = "calculating"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RateResult:
    status: RateStatus
    seq: int
    amount: Optional[Money] = None
    detail: Optional[str] = None
    destination: ShippingDestination = field(default_factory=ShippingDestination)
    weight_kg: Optional[Decimal] = None

    @property
    def ok(self) -> bool:
        return self.status is RateStatus.OK


__all__ = [
    "ShippingDestination",
    "City",
    "State",
    "Country",
    "ValidationReason",
    "ValidationResult",
    "CarrierSettings",
    "RateRequest",
    "IRateProvider",
    "RateStatus",
    "QuoteState",
    "RateResult",
]
