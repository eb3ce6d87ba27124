# 💾 checkout_engine/infrastructure/settings/settings_repository.py
"""
💾 SettingsRepository: асинхронне читання JSON-документів магазину (aiofiles).

🔹 `checkout_settings.json` → `CheckoutSettings`; відсутній файл → налаштування за замовчуванням.
🔹 `products.json` → каталог `{product_id: Product}`; відсутній файл → порожній каталог.
🔹 `aramex_settings.json` → `CarrierSettings` з доповненням креденшелів із конфігу.
🔹 Зламаний JSON → `SettingsError` (дані магазину не підміняються мовчки).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles                                                     # 📄 Асинхронне читання JSON

# 🔠 Системні імпорти
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

# 🧩 Внутрішні модулі проєкту
from checkout_engine.config.config_service import ConfigService
from checkout_engine.domain.delivery.interfaces import CarrierSettings
from checkout_engine.domain.products.entities import Product
from checkout_engine.domain.settings.checkout_settings import CheckoutSettings
from checkout_engine.errors.custom_errors import SettingsError
from checkout_engine.infrastructure.settings.mappers import (
    map_aramex_settings,
    map_catalog,
    map_checkout_settings,
)
from checkout_engine.shared.utils.logger import LOG_NAME

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.infrastructure.settings.repository")

_MISSING = object()


class SettingsRepository:
    """💾 Читає документи магазину з каталогу `settings.dir` (або переданого явно)."""

    def __init__(self, config: Optional[ConfigService] = None, *, base_dir: Optional[Union[str, Path]] = None) -> None:
        self._config = config
        configured = config.get("settings.dir", "data") if config is not None else "data"
        self._base_dir = Path(base_dir if base_dir is not None else configured)
        logger.debug("💾 SettingsRepository | dir=%s", self._base_dir)

    # ================================
    # 📣 ПУБЛІЧНИЙ КОНТРАКТ
    # ================================
    async def load_checkout_settings(self, filename: str = "checkout_settings.json") -> CheckoutSettings:
        raw = await self._read_json(filename)
        if raw is _MISSING:
            logger.info("📄 %s не знайдено, використовуємо налаштування за замовчуванням", filename)
            return map_checkout_settings(None)
        if not isinstance(raw, dict):
            raise SettingsError(f"{filename} must contain a JSON object")
        return map_checkout_settings(raw)

    async def load_catalog(self, filename: str = "products.json") -> Dict[str, Product]:
        raw = await self._read_json(filename)
        if raw is _MISSING:
            logger.info("📄 %s не знайдено, каталог порожній", filename)
            return {}
        records = raw.get("products") if isinstance(raw, dict) else raw
        if not isinstance(records, list):
            raise SettingsError(f"{filename} must contain a list of products")
        return map_catalog(records)

    async def load_aramex_settings(self, filename: str = "aramex_settings.json") -> CarrierSettings:
        raw = await self._read_json(filename)
        if raw is _MISSING:
            logger.info("📄 %s не знайдено, перевізник вимкнений", filename)
            return map_aramex_settings(None, self._config)
        if not isinstance(raw, dict):
            raise SettingsError(f"{filename} must contain a JSON object")
        return map_aramex_settings(raw, self._config)

    # ================================
    # 🧠 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _read_json(self, filename: str) -> Any:
        path = self._base_dir / filename
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as file_handle:
                content = await file_handle.read()
        except FileNotFoundError:
            return _MISSING
        if not content.strip():
            return _MISSING
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            logger.error("❌ Некоректний JSON у %s: %s", path, exc)
            raise SettingsError(f"Malformed JSON in {filename}", details=str(exc)) from exc
        logger.debug("📖 Прочитано %s", path)
        return data


__all__ = ["SettingsRepository"]
