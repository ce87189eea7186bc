"""Option assembly and validation.

The CLI collects whatever the user passed into :class:`RawOptions` and hands it,
together with a snapshot of the environment, to :func:`validate_options`. The
result is an immutable :class:`ValidatedOptions` that every downstream step
receives explicitly; nothing past this module reads environment variables.

Validation is a fixed sequence of fail-fast gates. The first failing gate
raises and later gates are not evaluated:

1. CSV path exists and is readable          -> ``CsvNotFoundError``
2. Notion API key present                   -> ``MissingApiKeyError``
3. Notion database ID present               -> ``MissingDatabaseIdError``
4. Identity present                         -> ``MissingIdentityError``
5. Identity in ``ALLOWED_USERS``            -> ``InvalidIdentityError``
6. Payment method in ``ALLOWED_PAYMENT_METHODS`` -> ``InvalidPaymentMethodError``
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Mapping
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import (
    CsvNotFoundError,
    InvalidIdentityError,
    InvalidPaymentMethodError,
    MissingApiKeyError,
    MissingDatabaseIdError,
    MissingIdentityError,
)

ALLOWED_PAYMENT_METHODS: tuple[str, ...] = (
    "Amex Platinum",
    "Apple Card",
    "Chase Freedom",
    "Chase Sapphire",
    "Chase Southwest",
)
ALLOWED_USERS: tuple[str, ...] = ("Alli", "Justin")

# Select value written to the "Status" property of every imported page.
DEFAULT_STATUS = "Requires Audit"

ENV_API_KEY = "NOTION_API_KEY"
ENV_DATABASE_ID = "NOTION_DATABASE_ID"
ENV_WHO_AM_I = "WHO_AM_I"
ENV_STATUS = "NOTION_STATUS"


@dataclass(frozen=True, slots=True)
class RawOptions:
    """Options exactly as supplied on the command line (``None`` when omitted)."""

    csv_file_path: str | PathLike[str]
    payment_method: str
    notion_api_key: str | None = None
    notion_database_id: str | None = None
    who_am_i: str | None = None
    dry_run: bool = False
    status: str | None = None


class ValidatedOptions(BaseModel):
    """Configuration that passed every validation gate."""

    model_config = ConfigDict(frozen=True)

    csv_file_path: Path
    payment_method: str
    notion_api_key: str = Field(repr=False)
    notion_database_id: str
    who_am_i: str
    dry_run: bool = False
    status: str = DEFAULT_STATUS


def _merged(explicit: str | None, environ: Mapping[str, str], key: str) -> str | None:
    # Explicit option wins; empty strings count as absent on both sides.
    value = explicit or environ.get(key)
    return value or None


def _is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


async def validate_options(
    options: RawOptions, environ: Mapping[str, str] | None = None
) -> ValidatedOptions:
    """Merge ``options`` with ``environ`` and run the validation gates in order.

    Only the existence/readability of the CSV file is probed; its content is
    not read here.
    """

    env: Mapping[str, str] = environ if environ is not None else {}

    csv_path = Path(options.csv_file_path)
    if not await asyncio.to_thread(_is_readable_file, csv_path):
        raise CsvNotFoundError(options.csv_file_path)

    api_key = _merged(options.notion_api_key, env, ENV_API_KEY)
    if not api_key:
        raise MissingApiKeyError()

    database_id = _merged(options.notion_database_id, env, ENV_DATABASE_ID)
    if not database_id:
        raise MissingDatabaseIdError()

    who_am_i = _merged(options.who_am_i, env, ENV_WHO_AM_I)
    if not who_am_i:
        raise MissingIdentityError()
    if who_am_i not in ALLOWED_USERS:
        raise InvalidIdentityError(who_am_i, ALLOWED_USERS)

    if options.payment_method not in ALLOWED_PAYMENT_METHODS:
        raise InvalidPaymentMethodError(options.payment_method, ALLOWED_PAYMENT_METHODS)

    status = (_merged(options.status, env, ENV_STATUS) or "").strip() or DEFAULT_STATUS

    return ValidatedOptions(
        csv_file_path=csv_path,
        payment_method=options.payment_method,
        notion_api_key=api_key,
        notion_database_id=database_id,
        who_am_i=who_am_i,
        dry_run=options.dry_run,
        status=status,
    )


__all__ = [
    "ALLOWED_PAYMENT_METHODS",
    "ALLOWED_USERS",
    "DEFAULT_STATUS",
    "RawOptions",
    "ValidatedOptions",
    "validate_options",
]
