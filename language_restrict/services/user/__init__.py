"""User services."""

from language_restrict.services.user.account_proxy import AccountProxy

__all__ = ["AccountProxy"]
