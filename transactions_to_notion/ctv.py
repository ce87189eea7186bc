"""Canonical Transaction View (CTV) record.

Field order (exact):
    - description: string (``"Unknown"`` when the mapped column is empty)
    - amount: string (unparsed numeric text, ``"0"`` when empty)
    - date: string (unparsed date text, today's ``YYYY-MM-DD`` when empty)
    - payment_method: the caller-supplied label, not the resolved bank
    - original_data: the full CSV row, including unmapped columns
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

type RawRow = Mapping[str, str]
"""One CSV line keyed by the header's column names."""


@dataclass(frozen=True, slots=True)
class CanonicalTransaction:
    """A single bank-agnostic transaction.

    ``amount`` and ``date`` stay as the source text; numeric and date coercion
    happen when the Notion page is built so the original values remain
    traceable.
    """

    description: str
    amount: str
    date: str
    payment_method: str
    original_data: RawRow


__all__ = ["CanonicalTransaction", "RawRow"]
