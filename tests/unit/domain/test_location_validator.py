"""
🧪 test_location_validator.py: unit-тести для LocationValidator та DestinationSelector

Перевіряє:
- Валідацію країна → регіон → місто з машиночитними причинами
- Allow-list увімкнених країн магазину
- Регістронезалежне порівняння міст
- Каскадне скидання регіону та міста у DestinationSelector
"""

import pytest

from checkout_engine.domain.delivery.interfaces import ShippingDestination, ValidationReason
from checkout_engine.domain.delivery.location_validator import DestinationSelector, LocationValidator
from checkout_engine.errors.custom_errors import ValidationError


def test_geography_has_gcc_countries(geography):
    codes = {country.code for country in geography.countries()}
    assert codes == {"AE", "SA", "KW", "QA", "BH", "OM"}


def test_valid_destination(validator):
    result = validator.validate(ShippingDestination("om", "ma", "  muscat "))
    assert result.valid is True
    assert bool(result) is True


@pytest.mark.parametrize(
    "destination, reason",
    [
        (ShippingDestination("", "MA", "Muscat"), ValidationReason.MISSING_COUNTRY),
        (ShippingDestination("FR", "IDF", "Paris"), ValidationReason.UNSUPPORTED_COUNTRY),
        (ShippingDestination("QA", "DO", "Doha"), ValidationReason.COUNTRY_NOT_ENABLED),
        (ShippingDestination("OM", "", "Muscat"), ValidationReason.MISSING_STATE),
        (ShippingDestination("OM", "DU", "Muscat"), ValidationReason.UNKNOWN_STATE),
        (ShippingDestination("OM", "MA", ""), ValidationReason.MISSING_CITY),
        (ShippingDestination("OM", "MA", "Dubai"), ValidationReason.CITY_NOT_IN_STATE),
    ],
)
def test_invalid_destinations(validator, destination, reason):
    result = validator.validate(destination)
    assert result.valid is False
    assert result.reason is reason


def test_without_allow_list_every_country_is_enabled(geography):
    validator = LocationValidator(geography)
    assert validator.validate(ShippingDestination("QA", "DO", "Doha")).valid is True
    assert len(validator.countries()) == 6


def test_enabled_countries_filter_listing(validator):
    codes = [country.code for country in validator.countries()]
    assert "QA" not in codes and "OM" in codes


def test_lookups(validator):
    assert any(state.code == "MA" for state in validator.states_for("om"))
    assert [c.name for c in validator.cities_for("OM", "MA")][:2] == ["Muscat", "Seeb"]
    assert validator.states_for("XX") == ()
    assert validator.cities_for("OM", "XX") == ()
    assert validator.is_serviceable("OM", "SEEB") is True
    assert validator.is_serviceable("OM", "Paris") is False


def test_with_enabled_countries_returns_new_validator(validator):
    widened = validator.with_enabled_countries(["QA"])
    assert widened.validate(ShippingDestination("QA", "DO", "Doha")).valid is True
    assert validator.validate(ShippingDestination("QA", "DO", "Doha")).valid is False


def test_selector_cascading_resets(validator):
    selector = DestinationSelector(validator)
    selector.select_country("OM")
    selector.select_state("MA")
    assert selector.select_city("seeb") == ShippingDestination("OM", "MA", "Seeb")
    assert selector.validate().valid is True

    changed_state = selector.select_state("DH")
    assert changed_state.city == ""
    assert changed_state.state == "DH"

    changed_country = selector.select_country("AE")
    assert changed_country == ShippingDestination("AE", "", "")


def test_selector_same_country_keeps_selection(validator):
    selector = DestinationSelector(validator)
    selector.select_country("OM")
    selector.select_state("MA")
    selector.select_city("Muscat")
    assert selector.select_country("om").city == "Muscat"


def test_selector_rejects_out_of_order_and_unknown_values(validator):
    selector = DestinationSelector(validator)
    with pytest.raises(ValidationError) as no_country:
        selector.select_state("MA")
    assert no_country.value.field == "state"

    selector.select_country("OM")
    with pytest.raises(ValidationError):
        selector.select_city("Muscat")
    with pytest.raises(ValidationError) as bad_state:
        selector.select_state("DU")
    assert bad_state.value.reason == ValidationReason.UNKNOWN_STATE.value

    selector.select_state("MA")
    with pytest.raises(ValidationError):
        selector.select_city("Dubai")
    with pytest.raises(ValidationError):
        selector.select_country("ZZ")


def test_selector_clear(validator):
    selector = DestinationSelector(validator)
    selector.select_country("OM")
    assert selector.clear() == ShippingDestination()
    assert selector.validate().reason is ValidationReason.MISSING_COUNTRY
