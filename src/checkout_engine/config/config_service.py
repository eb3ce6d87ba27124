# ⚙️ checkout_engine/config/config_service.py
"""
⚙️ config_service.py: доступ до статичної конфігурації ядра checkout.

🔹 Клас `ConfigService`:
- Завантажує .env (облікові дані перевізника), пакетний config.yaml,
  опційний зовнішній YAML та явні overrides: саме в такому порядку.
- Надає єдиний метод .get("a.b.c", default).
- Не є Singleton: екземпляр створюється явно і передається у сервіси.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv               # 🔐 Змінні середовища з .env

# 🔠 Системні імпорти
import copy                                  # 🧬 Глибокі копії для snapshot
import logging                               # 🧾 Логування
import os                                    # 📁 Доступ до змінних середовища
from pathlib import Path                     # 📁 Побудова шляхів
from typing import Any, Dict, Mapping, Optional, Union

# 🧩 Внутрішні модулі проєкту
from checkout_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# 🔐 Змінна середовища → ключ конфігурації
ENV_KEYS: Dict[str, str] = {
    "ARAMEX_BASE_URL": "carrier.aramex.base_url",
    "ARAMEX_ACCOUNT_NUMBER": "carrier.aramex.account_number",
    "ARAMEX_USERNAME": "carrier.aramex.username",
    "ARAMEX_PASSWORD": "carrier.aramex.password",
    "CHECKOUT_WEIGHT_PARSE_STRATEGY": "weight.parse_strategy",
    "CHECKOUT_LOG_LEVEL": "logging.level",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Обʼєднана конфігурація з кількох джерел.

    Пріоритет (кожне наступне перекриває попереднє): config.yaml → зовнішній YAML → .env → overrides.
    """

    def __init__(
        self,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
        yaml_path: Optional[Union[str, Path]] = None,
        load_env: bool = True,
        env_file: Optional[Union[str, Path]] = None,
    ) -> None:
        self._config: Dict[str, Any] = {}
        self._load_yaml(DEFAULT_CONFIG_PATH, required=True)
        if yaml_path:
            self._load_yaml(Path(yaml_path), required=False)
        if load_env:
            self._load_env(env_file)
        if overrides:
            self._deep_update(self._config, self._unflatten_dict(dict(overrides)))
        logger.debug("✅ ConfigService готовий (секцій: %d)", len(self._config))

    # ===============================
    # 📥 ДЖЕРЕЛА
    # ===============================
    def _load_yaml(self, path: Path, *, required: bool) -> None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            if required:
                raise
            logger.warning("⚠️ YAML-конфіг не знайдено: %s", path)
            return
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping: {path}")
        self._deep_update(self._config, data)
        logger.debug("📘 Завантажено YAML: %s", path)

    def _load_env(self, env_file: Optional[Union[str, Path]]) -> None:
        load_dotenv(dotenv_path=env_file)   # 🔐 Не перезаписує вже виставлені змінні
        env_vars = {key: os.getenv(name) for name, key in ENV_KEYS.items()}
        present = {key: value for key, value in env_vars.items() if value not in (None, "")}
        if present:
            self._deep_update(self._config, self._unflatten_dict(present))
            logger.debug("🔐 Застосовано змінні середовища: %s", sorted(present))

    # ===============================
    # 🔑 ДОСТУП
    # ===============================
    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Значення за ключем з крапками (наприклад: 'carrier.aramex.timeout_sec').

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                logger.debug("❓ Ключ '%s' не знайдено, повертаємо default", key)
                return default
        return value

    def section(self, key: str) -> Dict[str, Any]:
        """Копія вкладеної секції (порожній словник, якщо її немає)."""
        value = self.get(key, {})
        return copy.deepcopy(value) if isinstance(value, dict) else {}

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """'carrier.aramex.username' → {'carrier': {'aramex': {'username': ...}}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    @classmethod
    def _deep_update(cls, source: Dict[str, Any], overrides: Mapping[str, Any]) -> None:
        for key, value in overrides.items():
            if isinstance(value, Mapping) and isinstance(source.get(key), dict):
                cls._deep_update(source[key], value)
            elif isinstance(value, Mapping):
                source[key] = copy.deepcopy(dict(value))
            else:
                source[key] = value


__all__ = ["ConfigService", "DEFAULT_CONFIG_PATH", "ENV_KEYS"]
