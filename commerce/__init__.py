# commerce/__init__.py
"""
Accounts & orders domain package.

Provides:
- Core domain enums & models (Account, Order, OrderStatus)
- Thread-safe in-memory store with id assignment
- Services for accounts and orders, plus a lightweight event bus
- Settings and a composition root wiring everything onto one store
"""
