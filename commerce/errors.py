# commerce/errors.py
class CommerceError(Exception):
    """Base commerce error."""
    def __init__(self, msg: str = ""):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        return self.msg or self.__class__.__name__

def _preview(v, limit: int = 64) -> str:
    try:
        s = repr(v)
    except ValueError:
        # huge ints refuse str conversion
        return f"<{type(v).__name__}>"
    return s if len(s) <= limit else s[:limit] + "..."

class ValidationError(CommerceError):
    """Input rejected by a create_* precondition."""

    def __init__(self, msg: str = "", **ctx):
        super().__init__(msg)
        self.ctx = ctx

    def __str__(self):
        base = super().__str__()
        if self.ctx:
            details = ", ".join(f"{k}={_preview(v)}" for k, v in self.ctx.items())
            return f"{base} [{details}]"
        return base

class InvalidNameError(ValidationError):
    """Account name is missing or empty."""

class InvalidContactError(ValidationError):
    """Account contact is empty or lacks the separator."""

class InvalidDescriptionError(ValidationError):
    """Order item description is missing or empty."""

class InvalidAmountError(ValidationError):
    """Order amount is not a finite number greater than zero."""

class AccountStateError(CommerceError):
    """Owning account cannot accept new orders."""
    def __init__(self, account_id):
        super().__init__(f"{self.__doc__.rstrip('.')}: account_id={account_id!r}")
        self.account_id = account_id

class AccountNotFoundError(AccountStateError):
    """Account does not exist."""

class AccountInactiveError(AccountStateError):
    """Account is deactivated."""

class ConfigError(CommerceError):
    """Invalid commerce configuration."""
