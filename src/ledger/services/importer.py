"""CSV bulk import of transactions.

Workflow:
1. Decode the uploaded bytes
2. Parse rows (title, type, value, category), header line skipped
3. Reject the batch on the first invalid row
4. Check the batch against the current balance
5. Resolve or create every referenced category in one batch
6. Insert all transactions and commit once
"""

import csv
import io
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.exceptions import (
    InsufficientImportBalanceError,
    InvalidImportValueError,
    MalformedCSVError,
)
from ledger.models.transaction import Transaction, TransactionType
from ledger.repositories.category import CategoryRepository
from ledger.repositories.transaction import TransactionRepository

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("title", "type", "value", "category")

# Column limits of the transactions and categories tables.
MAX_TITLE_LENGTH = 255
MAX_CATEGORY_LENGTH = 100
MAX_VALUE = Decimal("9999999999.99")


@dataclass(frozen=True)
class ParsedTransaction:
    """A CSV row converted to transaction fields, not yet persisted."""

    title: str
    type: TransactionType
    value: Decimal
    category_title: str


@dataclass
class ImportResult:
    transactions: list[Transaction]
    categories_created: int

    @property
    def imported_count(self) -> int:
        return len(self.transactions)


def parse_transactions_csv(text: str) -> list[ParsedTransaction]:
    """Convert CSV text into parsed transactions.

    The first line is a header and is skipped. Cells are trimmed and blank
    lines ignored. Any invalid row rejects the whole file.

    Raises:
        MalformedCSVError: Missing columns, empty or overlong title/category,
            unknown type, a value that is not a number, has more than two
            decimal places or does not fit the value column
        InvalidImportValueError: A value that is zero or negative
    """
    reader = csv.reader(io.StringIO(text))
    next(reader, None)

    parsed: list[ParsedTransaction] = []
    for row in reader:
        cells = [cell.strip() for cell in row]
        if not any(cells):
            continue

        line = reader.line_num
        if len(cells) < len(CSV_COLUMNS):
            raise MalformedCSVError(details={"line": line, "reason": "missing columns"})

        title, type_, raw_value, category_title = cells[:4]
        if not title or not category_title:
            raise MalformedCSVError(details={"line": line, "reason": "empty title or category"})
        if len(title) > MAX_TITLE_LENGTH or len(category_title) > MAX_CATEGORY_LENGTH:
            raise MalformedCSVError(details={"line": line, "reason": "title or category too long"})

        try:
            transaction_type = TransactionType(type_.lower())
        except ValueError:
            raise MalformedCSVError(details={"line": line, "reason": "unknown type"})

        try:
            value = Decimal(raw_value)
        except InvalidOperation:
            raise MalformedCSVError(details={"line": line, "reason": "value is not a number"})
        if not value.is_finite():
            raise MalformedCSVError(details={"line": line, "reason": "value is not a number"})

        if value <= 0:
            raise InvalidImportValueError(details={"line": line})

        # Trailing zeros are fine; anything finer than cents would be rounded on insert.
        if value.normalize().as_tuple().exponent < -2 or value > MAX_VALUE:
            raise MalformedCSVError(details={"line": line, "reason": "value out of range"})

        parsed.append(
            ParsedTransaction(
                title=title,
                type=transaction_type,
                value=value,
                category_title=category_title,
            )
        )

    return parsed


def decode_csv(content: bytes) -> str:
    """Decode uploaded bytes as UTF-8, tolerating a byte order mark."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise MalformedCSVError(details={"reason": "file is not UTF-8 text"})


class TransactionImportService:
    """Service for importing a batch of transactions from CSV."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)

    async def import_csv(self, content: bytes, filename: str | None = None) -> ImportResult:
        """Import every row of a CSV upload, or nothing.

        Args:
            content: Raw file bytes
            filename: Original file name (logging only)

        Returns:
            The persisted transactions and the number of categories created

        Raises:
            MalformedCSVError: If the file cannot be parsed
            InvalidImportValueError: If any row has a non-positive value
            InsufficientImportBalanceError: If the batch nets an outcome larger
                than the current balance
        """
        rows = parse_transactions_csv(decode_csv(content))
        return await self.import_rows(rows, filename=filename)

    async def import_rows(
        self, rows: list[ParsedTransaction], filename: str | None = None
    ) -> ImportResult:
        """Persist already parsed rows as a single batch."""
        income = sum((row.value for row in rows if row.type == TransactionType.INCOME), Decimal("0"))
        outcome = sum((row.value for row in rows if row.type == TransactionType.OUTCOME), Decimal("0"))
        net = income - outcome

        # Only the batch's net effect is checked, not each row in order.
        balance = await self.transaction_repo.get_balance()
        if net < 0 and -net > balance.total:
            logger.warning(
                "Rejected import exceeding balance",
                extra={"upload_name": filename},
            )
            raise InsufficientImportBalanceError(
                details={"net": str(net), "balance": str(balance.total)}
            )

        try:
            categories, created = await self.category_repo.create_missing(
                row.category_title for row in rows
            )
            transactions = await self.transaction_repo.create_many(
                [
                    Transaction(
                        title=row.title,
                        value=row.value,
                        type=row.type.value,
                        category=categories[row.category_title],
                    )
                    for row in rows
                ]
            )
        except Exception as e:
            # Categories flushed for this batch go with it
            logger.error(
                "Import persistence failed",
                extra={"upload_name": filename, "error_type": type(e).__name__},
            )
            await self.db.rollback()
            raise

        logger.info(
            "Transactions imported",
            extra={
                "upload_name": filename,
                "imported_count": len(transactions),
                "categories_created": len(created),
            },
        )
        return ImportResult(transactions=transactions, categories_created=len(created))
