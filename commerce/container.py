# commerce/container.py
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from commerce.config import CommerceSettings
from commerce.event_bus import EventBus
from commerce.services.account_service import AccountService
from commerce.services.order_service import OrderService
from commerce.stores.memory_store import InMemoryStore
from utils.config import load_cfg
from utils.logger import configure_logging, logger


@dataclass
class CommerceContainer:
    """
    Composition root: one store shared by both services.
    The application holds the container and hands `accounts`/`orders` to callers.
    """
    settings: CommerceSettings
    store: InMemoryStore
    bus: EventBus
    accounts: AccountService
    orders: OrderService

    def reset(self) -> None:
        """Drop all records and restart id sequences (tests / demos only)."""
        self.store.clear()

    def stats(self) -> dict:
        return {
            "accounts": self.store.count_accounts(),
            "active_accounts": len(self.accounts.list_active_accounts()),
            "orders": self.store.count_orders(),
        }


def build_container(settings: Optional[CommerceSettings] = None,
                    cfg: Optional[Mapping[str, Any]] = None,
                    *,
                    setup_logging: bool = False) -> CommerceContainer:
    """
    Wire store, bus and services. `settings` wins over `cfg`; with neither,
    the repo config.yaml is read via load_cfg(). setup_logging=True
    re-registers the loguru sinks from settings.
    """
    if settings is None:
        if cfg is None:
            cfg = load_cfg()
        settings = CommerceSettings.from_cfg(cfg)

    if setup_logging:
        configure_logging(settings.log_level, settings.log_dir)
    if not settings.strict_contact:
        logger.warning("strict_contact disabled: contacts are only checked for non-emptiness")

    store = InMemoryStore()
    bus = EventBus()
    accounts = AccountService(
        store,
        strict_contact=settings.strict_contact,
        contact_separator=settings.contact_separator,
        event_bus=bus,
    )
    orders = OrderService(store, accounts, event_bus=bus)
    return CommerceContainer(settings=settings, store=store, bus=bus, accounts=accounts, orders=orders)
