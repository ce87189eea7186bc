"""CSV -> CTV normalization for Chase, AmEx and Apple Card exports.

Parsing follows RFC 4180 rules via the stdlib :mod:`csv` module (UTF-8,
quoted fields with embedded commas and newlines, doubled quotes). Rows are
pulled one at a time from an async iterator; each fetch runs the blocking
``csv`` read in a worker thread so the event loop is only suspended at row
boundaries and at end-of-stream.

No rows are dropped, merged or reordered: output order matches input order
and every row yields exactly one :class:`CanonicalTransaction`.
"""

from __future__ import annotations

import asyncio
import csv
from collections.abc import AsyncIterator, Callable
from datetime import date
from os import PathLike
from pathlib import Path

from .banks import FieldMapping, mapping_for
from .ctv import CanonicalTransaction, RawRow
from .logging_setup import get_logger

_logger = get_logger("transactions_to_notion.normalizers")

DEFAULT_DESCRIPTION = "Unknown"
DEFAULT_AMOUNT = "0"

_END = object()


def _today_iso(today: Callable[[], date] | None = None) -> str:
    return (today or date.today)().isoformat()


def normalize_row(
    row: RawRow,
    mapping: FieldMapping,
    payment_method: str,
    *,
    today: Callable[[], date] | None = None,
) -> CanonicalTransaction:
    """Map one bank-specific CSV row onto a :class:`CanonicalTransaction`.

    Mapping rules:
    - ``description``: ``row[mapping.description]`` or ``"Unknown"``
    - ``amount``: ``row[mapping.amount]`` as text, or ``"0"``
    - ``date``: ``row[mapping.transaction_date]`` as text, or today's date
    - ``original_data``: a copy of the full row
    - ``payment_method``: passed through unchanged
    """

    return CanonicalTransaction(
        description=row.get(mapping.description) or DEFAULT_DESCRIPTION,
        amount=row.get(mapping.amount) or DEFAULT_AMOUNT,
        date=row.get(mapping.transaction_date) or _today_iso(today),
        payment_method=payment_method,
        original_data=dict(row),
    )


async def iter_csv_rows(csv_path: str | PathLike[str]) -> AsyncIterator[RawRow]:
    """Yield the rows of ``csv_path`` lazily as header-keyed dicts.

    The file is opened on first iteration and closed when the generator is
    exhausted or closed. ``DictReader`` places surplus cells under a ``None``
    key and fills short rows with ``None``; both are normalized so every row is
    a plain ``dict[str, str]``.
    """

    with Path(csv_path).open(encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        while True:
            row = await asyncio.to_thread(next, reader, _END)
            if row is _END:
                return
            yield {k: (v if v is not None else "") for k, v in row.items() if k is not None}


async def parse_csv(
    csv_path: str | PathLike[str],
    payment_method: str,
    *,
    rows: AsyncIterator[RawRow] | None = None,
    today: Callable[[], date] | None = None,
) -> list[CanonicalTransaction]:
    """Read ``csv_path`` and return one canonical transaction per row.

    The bank is resolved from ``payment_method`` before anything is read, so
    an unsupported label raises
    :class:`~transactions_to_notion.errors.UnsupportedPaymentMethodError`
    without touching the file. Errors from the row source propagate and no
    partial result is returned.

    Parameters
    ----------
    csv_path:
        Path of the CSV export.
    payment_method:
        Allow-listed card label, e.g. ``"Chase Freedom"``.
    rows:
        Optional row source replacing :func:`iter_csv_rows` (tests, streams).
    today:
        Optional date factory used for rows without a date.
    """

    bank, mapping = mapping_for(payment_method)
    _logger.info(
        "Using %s field mappings for payment method: %s", bank.value, payment_method
    )

    source = rows if rows is not None else iter_csv_rows(csv_path)
    results: list[CanonicalTransaction] = []
    async for row in source:
        results.append(normalize_row(row, mapping, payment_method, today=today))
    return results


__all__ = [
    "DEFAULT_AMOUNT",
    "DEFAULT_DESCRIPTION",
    "iter_csv_rows",
    "normalize_row",
    "parse_csv",
]
