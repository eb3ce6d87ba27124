"""🗺️ Пакетні довідкові дані (таблиця обслуговуваної географії)."""
