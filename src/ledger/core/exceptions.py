"""Application exceptions for ledger operations.

Every exception carries an error_code that maps to the catalog in errors.py
and the HTTP status the API should answer with.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger validation and lookup failures.

    Attributes:
        error_code: Code from the error catalog (e.g., "TXN_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 400)
    """

    default_code = "UNKNOWN"
    default_status = 400

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(self.error_code)


class InvalidTransactionValueError(LedgerError):
    """Raised when a transaction value is zero or negative."""

    default_code = "TXN_001"


class InsufficientBalanceError(LedgerError):
    """Raised when an outcome would exceed the current balance."""

    default_code = "TXN_002"


class TransactionNotFoundError(LedgerError):
    default_code = "TXN_003"
    default_status = 404


class InvalidImportValueError(LedgerError):
    """Raised when any imported row has a non-positive value.

    The whole batch is rejected.
    """

    default_code = "IMP_001"


class InsufficientImportBalanceError(LedgerError):
    default_code = "IMP_002"


class MalformedCSVError(LedgerError):
    """Raised when the uploaded CSV cannot be turned into transactions.

    Common causes:
    - Rows with missing columns
    - Non-numeric values
    - Unknown transaction type
    - Undecodable file content
    """

    default_code = "IMP_003"


class InvalidFileTypeError(LedgerError):
    default_code = "IMP_004"


class FileTooLargeError(LedgerError):
    default_code = "IMP_005"
    default_status = 413
