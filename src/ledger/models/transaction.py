"""Transaction model representing a single income or outcome entry."""
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger.models.base import BaseModel


class TransactionType(str, Enum):
    INCOME = "income"
    OUTCOME = "outcome"


class Transaction(BaseModel):
    """Ledger transaction. Created and deleted, never updated in place."""

    __tablename__ = "transactions"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id"), nullable=False, index=True
    )

    __table_args__ = (
        CheckConstraint("value > 0", name="ck_transactions_value_positive"),
        CheckConstraint("type IN ('income', 'outcome')", name="ck_transactions_type"),
    )

    # Always loaded alongside the transaction; async sessions cannot lazy-load.
    category: Mapped["Category"] = relationship("Category", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, type={self.type}, value={self.value})>"
