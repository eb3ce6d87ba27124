# 🗺️ checkout_engine/domain/delivery/location_validator.py
"""
🗺️ Перевірка пункту призначення за статичною таблицею географії перевізника.

🔹 `GeographyTable`: незмінна таблиця країна → регіон → місто (безпечна для паралельного читання).
🔹 `LocationValidator`: чисті lookup-и та `validate()` без мережевих викликів.
🔹 `DestinationSelector`: сесія вибору з каскадним скиданням (країна скидає регіон і місто,
   регіон скидає місто), тож пункт призначення завжди внутрішньо узгоджений.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.delivery.interfaces import (
    City,
    Country,
    ShippingDestination,
    State,
    ValidationReason,
    ValidationResult,
)
from checkout_engine.errors.custom_errors import ValidationError
from checkout_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.delivery.location")


# ================================
# 🗺️ ТАБЛИЦЯ ГЕОГРАФІЇ
# ================================
class GeographyTable:
    """Незмінний індекс країн за ISO-кодом."""

    __slots__ = ("_countries",)

    def __init__(self, countries: Iterable[Country]) -> None:
        self._countries: Mapping[str, Country] = MappingProxyType({c.code.upper(): c for c in countries})

    def countries(self) -> Tuple[Country, ...]:
        return tuple(self._countries.values())

    def country(self, code: str) -> Optional[Country]:
        return self._countries.get((code or "").strip().upper())

    def all_cities(self, country_code: str) -> Tuple[City, ...]:
        country = self.country(country_code)
        if country is None:
            return ()
        return tuple(city for state in country.states for city in state.cities)

    def is_serviceable(self, country_code: str, city: str) -> bool:
        """Місто (без урахування регістру) є серед міст країни."""
        wanted = (city or "").strip().lower()
        return any(c.name.lower() == wanted for c in self.all_cities(country_code))

    def __len__(self) -> int:
        return len(self._countries)


# ================================
# ✅ ВАЛІДАТОР
# ================================
class LocationValidator:
    """
    ✅ Валідація та lookup-и над `GeographyTable`.

    Args:
        geography: Таблиця обслуговуваних локацій.
        enabled_countries: Allow-list країн магазину; None → без обмежень.
    """

    def __init__(self, geography: GeographyTable, enabled_countries: Optional[Iterable[str]] = None) -> None:
        self._geo = geography
        self._enabled = (
            frozenset(code.strip().upper() for code in enabled_countries) if enabled_countries is not None else None
        )

    @property
    def geography(self) -> GeographyTable:
        return self._geo

    def with_enabled_countries(self, enabled_countries: Optional[Iterable[str]]) -> "LocationValidator":
        return LocationValidator(self._geo, enabled_countries)

    # ================================
    # 🔍 LOOKUP-И
    # ================================
    def countries(self) -> Tuple[Country, ...]:
        if self._enabled is None:
            return self._geo.countries()
        return tuple(c for c in self._geo.countries() if c.code in self._enabled)

    def states_for(self, country_code: str) -> Tuple[State, ...]:
        country = self._geo.country(country_code)
        return country.states if country else ()

    def cities_for(self, country_code: str, state_code: str) -> Tuple[City, ...]:
        country = self._geo.country(country_code)
        state = country.find_state(state_code) if country else None
        return state.cities if state else ()

    def is_serviceable(self, country_code: str, city: str) -> bool:
        return self._geo.is_serviceable(country_code, city)

    # ================================
    # ✅ ВАЛІДАЦІЯ
    # ================================
    def validate(self, destination: ShippingDestination) -> ValidationResult:
        """Пункт придатний для котирування лише коли всі три поля узгоджені й обслуговуються."""
        result = self._validate(destination)
        if not result.valid:
            logger.debug(
                "🧭 Destination rejected | %s/%s/%s reason=%s",
                destination.country,
                destination.state,
                destination.city,
                result.reason.value if result.reason else None,
            )
        return result

    def _validate(self, destination: ShippingDestination) -> ValidationResult:
        if not destination.country:
            return ValidationResult(False, ValidationReason.MISSING_COUNTRY, "Country is required")
        country = self._geo.country(destination.country)
        if country is None:
            return ValidationResult(
                False, ValidationReason.UNSUPPORTED_COUNTRY, f"Country {destination.country} is not supported"
            )
        if self._enabled is not None and country.code not in self._enabled:
            return ValidationResult(
                False, ValidationReason.COUNTRY_NOT_ENABLED, f"Shipping to {country.code} is not enabled"
            )
        if not destination.state:
            return ValidationResult(False, ValidationReason.MISSING_STATE, "State is required")
        state = country.find_state(destination.state)
        if state is None:
            return ValidationResult(
                False,
                ValidationReason.UNKNOWN_STATE,
                f"State {destination.state} does not belong to {country.code}",
            )
        if not destination.city:
            return ValidationResult(False, ValidationReason.MISSING_CITY, "City is required")
        if state.find_city(destination.city) is None:
            return ValidationResult(
                False,
                ValidationReason.CITY_NOT_IN_STATE,
                f"City {destination.city} does not belong to {country.code}/{state.code}",
            )
        if not self._geo.is_serviceable(country.code, destination.city):
            return ValidationResult(False, ValidationReason.NOT_SERVICEABLE, "Destination is not serviceable")
        return ValidationResult(True)


# ================================
# 🎛️ СЕСІЯ ВИБОРУ ПУНКТУ ПРИЗНАЧЕННЯ
# ================================
class DestinationSelector:
    """🎛️ Каскадний вибір країна → регіон → місто з інваріантом узгодженості."""

    def __init__(self, validator: LocationValidator) -> None:
        self._validator = validator
        self._country = ""
        self._state = ""
        self._city = ""

    @property
    def destination(self) -> ShippingDestination:
        return ShippingDestination(self._country, self._state, self._city)

    def select_country(self, code: str) -> ShippingDestination:
        country = self._validator.geography.country(code)
        if country is None:
            raise ValidationError(f"Unknown country {code!r}", field="country", reason=ValidationReason.UNSUPPORTED_COUNTRY.value)
        if country.code != self._country:
            self._country, self._state, self._city = country.code, "", ""   # 🔁 Скидаємо регіон і місто
            logger.debug("🌍 Країну змінено → %s (регіон і місто скинуто)", country.code)
        return self.destination

    def select_state(self, code: str) -> ShippingDestination:
        if not self._country:
            raise ValidationError("Select a country first", field="state", reason=ValidationReason.MISSING_COUNTRY.value)
        state = self._validator.geography.country(self._country).find_state(code)
        if state is None:
            raise ValidationError(
                f"State {code!r} does not belong to {self._country}",
                field="state",
                reason=ValidationReason.UNKNOWN_STATE.value,
            )
        if state.code != self._state:
            self._state, self._city = state.code, ""                        # 🔁 Скидаємо місто
        return self.destination

    def select_city(self, name: str) -> ShippingDestination:
        if not self._state:
            raise ValidationError("Select a state first", field="city", reason=ValidationReason.MISSING_STATE.value)
        state = self._validator.geography.country(self._country).find_state(self._state)
        city = state.find_city(name) if state else None
        if city is None:
            raise ValidationError(
                f"City {name!r} does not belong to {self._country}/{self._state}",
                field="city",
                reason=ValidationReason.CITY_NOT_IN_STATE.value,
            )
        self._city = city.name                                               # 🏷️ Канонічна назва з таблиці
        return self.destination

    def clear(self) -> ShippingDestination:
        self._country, self._state, self._city = "", "", ""
        return self.destination

    def validate(self) -> ValidationResult:
        return self._validator.validate(self.destination)


__all__ = ["GeographyTable", "LocationValidator", "DestinationSelector"]
