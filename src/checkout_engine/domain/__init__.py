"""🏛️ Доменний шар checkout_engine: чисті сутності та сервіси без I/O."""
