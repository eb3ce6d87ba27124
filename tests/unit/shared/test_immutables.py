"""
🧪 test_immutables.py: unit-тести для freeze / frozen_mapping
"""

from decimal import Decimal
from types import MappingProxyType

import pytest

from checkout_engine.shared.utils.immutables import freeze, frozen_mapping, is_frozen_mapping


def test_freeze_is_recursive():
    frozen = freeze({"tiers": [{"cost": Decimal("1.5")}], "codes": {"OM", "AE"}})
    assert is_frozen_mapping(frozen)
    assert isinstance(frozen["tiers"], tuple)
    assert is_frozen_mapping(frozen["tiers"][0])
    assert frozen["codes"] == frozenset({"OM", "AE"})
    with pytest.raises(TypeError):
        frozen["tiers"] = ()


def test_freeze_keeps_scalars():
    assert freeze(Decimal("2")) == Decimal("2")
    assert freeze("OMR") == "OMR"
    assert freeze(None) is None


def test_frozen_mapping_is_a_detached_copy():
    source = {"OMR": Decimal("5")}
    view = frozen_mapping(source)
    source["USD"] = Decimal("13")
    assert dict(view) == {"OMR": Decimal("5")}
    assert isinstance(frozen_mapping(), MappingProxyType)
    assert len(frozen_mapping(None)) == 0
