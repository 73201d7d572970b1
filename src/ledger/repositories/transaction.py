"""Transaction repository with listing and balance aggregation."""
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.models.transaction import Transaction, TransactionType
from ledger.repositories.base import BaseRepository


@dataclass(frozen=True)
class Balance:
    """Derived totals; never persisted."""

    income: Decimal
    outcome: Decimal

    @property
    def total(self) -> Decimal:
        return self.income - self.outcome


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def list_newest_first(self) -> list[Transaction]:
        """Get every transaction with its category, newest first."""
        result = await self.db.execute(
            select(Transaction).order_by(Transaction.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_balance(self) -> Balance:
        """
        Sum all persisted transactions by type.
        Recomputed on every call; an empty ledger yields zeros.
        """
        result = await self.db.execute(
            select(Transaction.type, func.sum(Transaction.value).label("total"))
            .group_by(Transaction.type)
        )
        totals = {row.type: Decimal(str(row.total or 0)) for row in result}
        return Balance(
            income=totals.get(TransactionType.INCOME.value, Decimal("0")),
            outcome=totals.get(TransactionType.OUTCOME.value, Decimal("0")),
        )
