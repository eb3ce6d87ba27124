"""🏗️ Інфраструктурний шар: конвертер валют, клієнт перевізника, завантаження налаштувань."""
