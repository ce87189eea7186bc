"""Bank identifiers and their CSV column mappings.

Each supported card issuer exports transactions with its own header names.
``BANK_MAPPINGS`` records, per bank, which columns hold the transaction date,
description and amount; every other column (``Category``, ``Memo``, ...) is
kept only in the transaction's ``original_data``. The bank for an upload is
derived from the payment-method label by case-insensitive prefix, e.g.
``"Chase Sapphire"`` -> :attr:`BankId.CHASE`.

Header reference (as exported):

- Chase: ``Transaction Date, Post Date, Description, Category, Type, Amount, Memo``
- AmEx: ``Date, Description, Card Member, Account #, Amount, ..., Category``
- Apple Card: ``Transaction Date, Clearing Date, Description, Merchant,
  Category, Type, Amount (USD), Purchased By``
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from .errors import UnsupportedPaymentMethodError


class BankId(StrEnum):
    # Declaration order is the prefix resolution order.
    CHASE = "chase"
    AMEX = "amex"
    APPLE = "apple"


@dataclass(frozen=True, slots=True)
class FieldMapping:
    """CSV column names holding the canonical fields for one bank."""

    transaction_date: str
    description: str
    amount: str


BANK_MAPPINGS: Mapping[BankId, FieldMapping] = MappingProxyType(
    {
        BankId.CHASE: FieldMapping(
            transaction_date="Transaction Date",
            description="Description",
            amount="Amount",
        ),
        BankId.AMEX: FieldMapping(
            transaction_date="Date",
            description="Description",
            amount="Amount",
        ),
        BankId.APPLE: FieldMapping(
            transaction_date="Transaction Date",
            description="Merchant",
            amount="Amount (USD)",
        ),
    }
)


def resolve_bank(payment_method: str) -> BankId:
    """Return the bank whose name prefixes ``payment_method`` (case-insensitive).

    Raises :class:`UnsupportedPaymentMethodError` naming the literal input when
    no prefix matches.
    """

    label = payment_method.lower()
    for bank in BankId:
        if label.startswith(bank.value):
            return bank
    raise UnsupportedPaymentMethodError(payment_method)


def mapping_for(payment_method: str) -> tuple[BankId, FieldMapping]:
    bank = resolve_bank(payment_method)
    return bank, BANK_MAPPINGS[bank]


__all__ = ["BANK_MAPPINGS", "BankId", "FieldMapping", "mapping_for", "resolve_bank"]
