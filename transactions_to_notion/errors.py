"""Exception taxonomy for ``transactions_to_notion``.

Configuration and input errors are fatal and reported by the CLI as a one-line
``Error: <message>`` before any call to Notion. Per-record upload errors are
never raised from here; the uploader catches whatever the client raises.
"""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike


class TransactionsToNotionError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(TransactionsToNotionError):
    """A required option is missing or holds a value outside its allow-list."""


class CsvNotFoundError(ConfigurationError):
    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = str(path)
        super().__init__(f"CSV file not found at path: {self.path}")


class MissingApiKeyError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "Notion API key is required. Provide it via --notion-api-key option "
            "or NOTION_API_KEY env var."
        )


class MissingDatabaseIdError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "Notion database ID is required. Provide it via --notion-database-id "
            "option or NOTION_DATABASE_ID env var."
        )


class MissingIdentityError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "WHO_AM_I is required. Provide it via --who-am-i option or WHO_AM_I env var."
        )


class _NotAllowedError(ConfigurationError):
    option: str = ""

    def __init__(self, value: str, allowed: Sequence[str]) -> None:
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"{self.option} must be one of: {', '.join(self.allowed)} (got {value!r})"
        )


class InvalidIdentityError(_NotAllowedError):
    option = "--who-am-i"


class InvalidPaymentMethodError(_NotAllowedError):
    option = "--payment-method"


class UnsupportedPaymentMethodError(TransactionsToNotionError, ValueError):
    """The payment-method label does not start with a known bank prefix."""

    def __init__(self, payment_method: str) -> None:
        self.payment_method = payment_method
        super().__init__(
            f"Unsupported payment method: {payment_method}. Cannot determine bank type."
        )


__all__ = [
    "ConfigurationError",
    "CsvNotFoundError",
    "InvalidIdentityError",
    "InvalidPaymentMethodError",
    "MissingApiKeyError",
    "MissingDatabaseIdError",
    "MissingIdentityError",
    "TransactionsToNotionError",
    "UnsupportedPaymentMethodError",
]
