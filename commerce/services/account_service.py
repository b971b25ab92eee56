# commerce/services/account_service.py
from dataclasses import replace
from typing import List, Optional

from commerce.contracts import AccountManager, Store
from commerce.errors import ValidationError
from commerce.event_bus import EventBus, TOPIC_ACCOUNT_CREATED, TOPIC_ACCOUNT_DEACTIVATED
from commerce.models import Account, INVALID_ID
from commerce.validation import check_contact, check_name
from utils.logger import logger as default_logger


class AccountService(AccountManager):
    """
    Account creation, queries and deactivation on top of a shared Store.
    Holds no state of its own beyond the store reference.
    """
    def __init__(self,
                 store: Store,
                 *,
                 strict_contact: bool = True,
                 contact_separator: str = "@",
                 event_bus: Optional[EventBus] = None,
                 logger=None) -> None:
        self._store = store
        self._strict_contact = strict_contact
        self._separator = contact_separator
        self._bus = event_bus
        self._log = logger or default_logger.bind(component="AccountService")

    def create_account(self, name: str, contact: str) -> int:
        """Return the new account id, or INVALID_ID if name/contact are rejected."""
        try:
            check_name(name)
            check_contact(contact, strict=self._strict_contact, separator=self._separator)
        except ValidationError as e:
            self._log.debug(f"create_account rejected: {e}")
            return INVALID_ID

        account = Account(id=0, name=name, contact=contact, active=True)
        aid = self._store.insert_account(account)
        self._log.info(f"account created id={aid}")
        self._publish(TOPIC_ACCOUNT_CREATED, replace(account, id=aid))
        return aid

    def get_account(self, account_id: int) -> Optional[Account]:
        return self._store.get_account(account_id)

    def list_active_accounts(self) -> List[Account]:
        return [a for a in self._store.list_accounts() if a.active]

    def deactivate_account(self, account_id: int) -> bool:
        """
        One-way switch to inactive. Unknown id -> False; already inactive -> True, unchanged.
        """
        acc = self._store.get_account(account_id)
        if acc is None:
            return False
        if not acc.active:
            return True

        acc.active = False
        if not self._store.replace_account(acc):
            # removed between read and write
            return False
        self._log.info(f"account deactivated id={account_id}")
        self._publish(TOPIC_ACCOUNT_DEACTIVATED, acc)
        return True

    def account_exists(self, account_id: int) -> bool:
        return self.get_account(account_id) is not None

    def _publish(self, topic: str, account: Account) -> None:
        if self._bus is not None:
            self._bus.publish(topic, replace(account))
