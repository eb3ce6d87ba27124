# 🗺️ checkout_engine/infrastructure/delivery/geography_loader.py
"""
🗺️ Завантаження таблиці обслуговуваних локацій із YAML у доменну `GeographyTable`.

Таблиця статична, тому пакетна версія кешується після першого читання.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                                         # 📘 Читання YAML

# 🔠 Системні імпорти
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# 🧩 Внутрішні модулі проєкту
from checkout_engine.domain.delivery.interfaces import City, Country, State
from checkout_engine.domain.delivery.location_validator import GeographyTable
from checkout_engine.errors.custom_errors import SettingsError
from checkout_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.delivery.geography")

DEFAULT_GEOGRAPHY_PATH = Path(__file__).resolve().parents[2] / "data" / "serviceable_locations.yaml"


def _city(raw: Any) -> City:
    if isinstance(raw, str):
        return City(name=raw.strip())
    return City(name=str(raw["name"]).strip(), name_ar=str(raw.get("name_ar") or ""))


def _state(raw: Dict[str, Any]) -> State:
    return State(
        code=str(raw["code"]).strip().upper(),
        name=str(raw.get("name") or raw["code"]),
        name_ar=str(raw.get("name_ar") or ""),
        cities=tuple(_city(c) for c in raw.get("cities") or ()),
    )


def _country(raw: Dict[str, Any]) -> Country:
    return Country(
        code=str(raw["code"]).strip().upper(),
        name=str(raw.get("name") or raw["code"]),
        name_ar=str(raw.get("name_ar") or ""),
        currency=str(raw.get("currency") or ""),
        states=tuple(_state(s) for s in raw.get("states") or ()),
    )


def parse_geography(data: Any) -> GeographyTable:
    """🧱 Будує таблицю з уже розібраного YAML/JSON-документа."""
    if not isinstance(data, dict) or not isinstance(data.get("countries"), list):
        raise SettingsError("Geography document must contain a 'countries' list")
    try:
        countries: List[Country] = [_country(raw) for raw in data["countries"]]
    except (KeyError, TypeError, AttributeError) as exc:
        raise SettingsError("Malformed geography entry", details=str(exc)) from exc
    return GeographyTable(countries)


@lru_cache(maxsize=1)
def _load_default() -> GeographyTable:
    return _read(DEFAULT_GEOGRAPHY_PATH)


def _read(path: Path) -> GeographyTable:
    with open(path, "r", encoding="utf-8") as f:
        table = parse_geography(yaml.safe_load(f))
    logger.info("🗺️ Географію завантажено: %d країн (%s)", len(table), path.name)
    return table


def load_geography(path: Optional[Union[str, Path]] = None) -> GeographyTable:
    """
    📥 Повертає таблицю географії.

    Args:
        path: Власний YAML; None → пакетна таблиця GCC (кешується).

    Raises:
        FileNotFoundError: файл відсутній.
        SettingsError: структура документа некоректна.
    """
    if path is None:
        return _load_default()
    return _read(Path(path))


__all__ = ["DEFAULT_GEOGRAPHY_PATH", "load_geography", "parse_geography"]
