"""Build Notion pages from canonical transactions and create them one by one.

Page properties (Notion database schema):

- ``Date`` (date): transaction date as ``YYYY-MM-DD``; today when unparseable
- ``Expense`` (title): description, ``"Unknown Transaction"`` when empty
- ``Total Amount`` (number): absolute value of the amount, ``0`` when unparseable
- ``Status`` (select): constant status tag, ``"Requires Audit"`` by default
- ``Payment Method`` (select): ``"<identity>'s <payment method>"``

Uploads are sequential and independent. A failing page is logged and recorded
in the returned :class:`UploadSummary`; the loop then moves on. There are no
retries, no batching and no timeout beyond what the client itself applies.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Protocol

from .ctv import CanonicalTransaction
from .logging_setup import get_logger
from .options import DEFAULT_STATUS

_logger = get_logger("transactions_to_notion.upload")

DEFAULT_TITLE = "Unknown Transaction"
DEFAULT_CARD = "Unknown Card"

# Accepted source date formats beyond ISO 8601.
_DATE_FORMATS: tuple[str, ...] = ("%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d")


class _Pages(Protocol):
    async def create(self, **kwargs: Any) -> Any: ...


class NotionPagesClient(Protocol):
    """The slice of ``notion_client.AsyncClient`` the uploader relies on."""

    pages: _Pages


@dataclass(frozen=True, slots=True)
class UploadSummary:
    attempted: int
    uploaded: int
    failed: tuple[tuple[CanonicalTransaction, str], ...] = field(default=())


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------


def format_date_to_iso(value: str | None) -> str | None:
    """Return ``value`` as ``YYYY-MM-DD`` or ``None`` when it cannot be parsed.

    Accepts ISO dates and date-times plus ``MM/DD/YYYY``, ``MM/DD/YY`` and
    ``YYYY/MM/DD``. A non-empty value that matches none of them is logged as a
    warning.
    """

    if value is None:
        return None
    s = value.strip()
    if not s:
        return None

    try:
        return datetime.fromisoformat(s).date().isoformat()
    except ValueError:
        pass
    # Some exports append a time after the date; only the date part matters.
    first = s.split()[0]
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(first, fmt).date().isoformat()
        except ValueError:
            continue

    _logger.warning("Date parsing error for %r: unrecognized date format", value)
    return None


def parse_amount(value: str | None) -> float:
    """Return the absolute numeric value of ``value``; ``0.0`` when unparseable.

    Signs, a leading ``$``, thousands separators and accounting-style
    parentheses are stripped before parsing.
    """

    if value is None:
        return 0.0
    s = value.strip()
    while s[:1] in {"+", "-", "$", "("}:
        s = s[1:].lstrip()
    s = s.rstrip(")").replace(",", "").strip()
    if not s:
        return 0.0
    try:
        d = Decimal(s)
    except InvalidOperation:
        return 0.0
    if not d.is_finite():
        return 0.0
    # Decimal accepts exponents far beyond float range ("1e400").
    amount = float(abs(d))
    return amount if math.isfinite(amount) else 0.0


def payment_method_label(identity: str, payment_method: str | None) -> str:
    return f"{identity}'s {payment_method or DEFAULT_CARD}"


def build_page_properties(
    transaction: CanonicalTransaction,
    identity: str,
    *,
    status: str = DEFAULT_STATUS,
    today: Callable[[], date] | None = None,
) -> dict[str, Any]:
    """Map one transaction onto the Notion database's property schema."""

    start = format_date_to_iso(transaction.date)
    if start is None:
        start = (today or date.today)().isoformat()
        _logger.warning(
            "Substituting %s for unparseable date %r (%s)",
            start,
            transaction.date,
            transaction.description,
        )

    return {
        "Date": {"date": {"start": start}},
        "Expense": {
            "title": [{"text": {"content": transaction.description or DEFAULT_TITLE}}]
        },
        "Total Amount": {"number": parse_amount(transaction.amount)},
        "Status": {"select": {"name": status}},
        "Payment Method": {
            "select": {"name": payment_method_label(identity, transaction.payment_method)}
        },
    }


# ---------------------------------------------------------------------------
# Upload loop and dry-run rendering
# ---------------------------------------------------------------------------


async def upload_to_notion(
    client: NotionPagesClient,
    database_id: str,
    transactions: Iterable[CanonicalTransaction],
    identity: str,
    *,
    status: str = DEFAULT_STATUS,
) -> UploadSummary:
    """Create one page per transaction in ``database_id``, in input order.

    Each ``pages.create`` call is awaited before the next one starts. Any
    exception raised for a single page is logged and recorded; the remaining
    transactions are still attempted.
    """

    attempted = 0
    uploaded = 0
    failed: list[tuple[CanonicalTransaction, str]] = []

    for tx in transactions:
        attempted += 1
        try:
            await client.pages.create(
                parent={"database_id": database_id},
                properties=build_page_properties(tx, identity, status=status),
            )
        except Exception as e:  # noqa: BLE001 - one bad page must not stop the batch
            _logger.warning(
                "Failed to upload transaction %r (%s): %s",
                tx.description,
                e.__class__.__name__,
                e,
            )
            failed.append((tx, str(e)))
            continue

        uploaded += 1
        _logger.info(
            "Uploaded: %.2f | %s | %s | %s",
            parse_amount(tx.amount),
            tx.description,
            tx.date,
            payment_method_label(identity, tx.payment_method),
        )

    return UploadSummary(attempted=attempted, uploaded=uploaded, failed=tuple(failed))


def format_dry_run(transactions: Sequence[CanonicalTransaction]) -> list[str]:
    """Render the transactions that would be uploaded, one line each."""

    lines = [
        f"{i}. {tx.description or 'Unknown'} | ${parse_amount(tx.amount):.2f} | {tx.date}"
        for i, tx in enumerate(transactions, start=1)
    ]
    lines.append(f"Total: {len(transactions)} transactions")
    return lines


__all__ = [
    "DEFAULT_CARD",
    "DEFAULT_TITLE",
    "NotionPagesClient",
    "UploadSummary",
    "build_page_properties",
    "format_date_to_iso",
    "format_dry_run",
    "parse_amount",
    "payment_method_label",
    "upload_to_notion",
]
