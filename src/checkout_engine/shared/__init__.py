"""🧰 Спільний шар checkout_engine (утиліти без доменної логіки)."""
