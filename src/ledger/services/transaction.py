"""Transaction service for create, delete and listing operations."""
import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.exceptions import (
    InsufficientBalanceError,
    InvalidTransactionValueError,
    TransactionNotFoundError,
)
from ledger.models.transaction import Transaction, TransactionType
from ledger.repositories.category import CategoryRepository
from ledger.repositories.transaction import Balance, TransactionRepository

logger = logging.getLogger(__name__)


class TransactionService:
    """Service layer for transaction-related operations."""

    def __init__(self, db: AsyncSession):
        """Initialize transaction service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)

    async def get_balance(self) -> Balance:
        return await self.transaction_repo.get_balance()

    async def list_with_balance(self) -> tuple[list[Transaction], Balance]:
        """Get every transaction (newest first) and the current balance."""
        transactions = await self.transaction_repo.list_newest_first()
        balance = await self.transaction_repo.get_balance()
        return transactions, balance

    async def get_transaction(self, transaction_id: UUID) -> Transaction:
        """Get a transaction by ID.

        Raises:
            TransactionNotFoundError: If no transaction has this ID
        """
        transaction = await self.transaction_repo.get_by_id(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(details={"transaction_id": str(transaction_id)})
        return transaction

    async def create_transaction(
        self,
        title: str,
        value: Decimal,
        transaction_type: TransactionType,
        category_title: str,
    ) -> Transaction:
        """Validate and persist a single transaction.

        The category is resolved by title and created when missing; the new
        category and the transaction are committed together.

        Args:
            title: Transaction description
            value: Transaction value, must be positive
            transaction_type: income or outcome
            category_title: Title of the category to attach

        Returns:
            The persisted transaction with its category loaded

        Raises:
            InvalidTransactionValueError: If value is zero or negative
            InsufficientBalanceError: If an outcome exceeds the current balance
        """
        transaction_type = TransactionType(transaction_type)
        if value <= 0:
            logger.warning("Rejected transaction with non-positive value")
            raise InvalidTransactionValueError(details={"value": str(value)})

        balance = await self.transaction_repo.get_balance()
        if transaction_type == TransactionType.OUTCOME and value > balance.total:
            logger.warning(
                "Rejected outcome exceeding balance",
                extra={"transaction_type": transaction_type.value},
            )
            raise InsufficientBalanceError(
                details={"value": str(value), "balance": str(balance.total)}
            )

        try:
            category, created = await self.category_repo.get_or_create(category_title)
            transaction = await self.transaction_repo.create(
                Transaction(
                    title=title,
                    value=value,
                    type=transaction_type.value,
                    category=category,
                )
            )
        except Exception as e:
            # Drop a category flushed for this transaction
            logger.error("Transaction persistence failed", extra={"error_type": type(e).__name__})
            await self.db.rollback()
            raise

        if created:
            logger.info("Category created", extra={"category_id": category.id})

        logger.info(
            "Transaction created",
            extra={"transaction_id": transaction.id, "transaction_type": transaction.type},
        )
        return transaction

    async def delete_transaction(self, transaction_id: UUID) -> None:
        """Delete a transaction by ID.

        Raises:
            TransactionNotFoundError: If no transaction has this ID
        """
        deleted = await self.transaction_repo.delete(transaction_id)
        if not deleted:
            logger.warning(
                "Delete requested for unknown transaction",
                extra={"transaction_id": transaction_id},
            )
            raise TransactionNotFoundError(details={"transaction_id": str(transaction_id)})

        logger.info("Transaction deleted", extra={"transaction_id": transaction_id})
