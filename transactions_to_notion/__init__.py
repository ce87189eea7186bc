"""Public interface for the ``transactions_to_notion`` package.

Symbol re-exports only; no runtime logic lives here.
"""

from .banks import BANK_MAPPINGS, BankId, FieldMapping, mapping_for, resolve_bank
from .ctv import CanonicalTransaction, RawRow
from .errors import (
    ConfigurationError,
    CsvNotFoundError,
    InvalidIdentityError,
    InvalidPaymentMethodError,
    MissingApiKeyError,
    MissingDatabaseIdError,
    MissingIdentityError,
    TransactionsToNotionError,
    UnsupportedPaymentMethodError,
)
from .normalizers import iter_csv_rows, normalize_row, parse_csv
from .options import (
    ALLOWED_PAYMENT_METHODS,
    ALLOWED_USERS,
    DEFAULT_STATUS,
    RawOptions,
    ValidatedOptions,
    validate_options,
)
from .upload import (
    UploadSummary,
    build_page_properties,
    format_date_to_iso,
    format_dry_run,
    parse_amount,
    upload_to_notion,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Banks
    "BANK_MAPPINGS",
    "BankId",
    "FieldMapping",
    "mapping_for",
    "resolve_bank",
    # Models
    "CanonicalTransaction",
    "RawRow",
    "RawOptions",
    "UploadSummary",
    "ValidatedOptions",
    # Pipeline
    "iter_csv_rows",
    "normalize_row",
    "parse_csv",
    "validate_options",
    "build_page_properties",
    "format_date_to_iso",
    "format_dry_run",
    "parse_amount",
    "upload_to_notion",
    # Constants
    "ALLOWED_PAYMENT_METHODS",
    "ALLOWED_USERS",
    "DEFAULT_STATUS",
    # Errors
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
