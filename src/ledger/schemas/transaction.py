"""Transaction request/response schemas.

Monetary values are stored as decimals with two places and serialized as
JSON numbers.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ledger.models.transaction import TransactionType
from ledger.schemas.category import CategoryResponse


# Request schemas


class TransactionCreateRequest(BaseModel):
    """Request to record a single transaction."""

    title: str = Field(min_length=1, max_length=255, description="Transaction description")
    # Positivity is a business rule enforced by the service (TXN_001).
    value: Decimal = Field(max_digits=12, decimal_places=2, description="Transaction value")
    type: TransactionType = Field(description="income or outcome")
    category: str = Field(
        min_length=1, max_length=100, description="Category title, created when missing"
    )


# Response schemas


class BalanceResponse(BaseModel):
    """Aggregated totals over every persisted transaction."""

    income: float = Field(description="Sum of income values")
    outcome: float = Field(description="Sum of outcome values")
    total: float = Field(description="income - outcome")

    model_config = ConfigDict(from_attributes=True)


class TransactionResponse(BaseModel):
    """Transaction data for API responses."""

    id: UUID
    title: str
    value: float
    type: TransactionType
    category_id: UUID
    category: CategoryResponse
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionListResult(BaseModel):
    """All transactions together with the current balance."""

    transactions: list[TransactionResponse]
    balance: BalanceResponse
    currency: str = Field(description="Informational currency code")


class TransactionImportResult(BaseModel):
    """Outcome of a CSV import; all rows or none are persisted."""

    transactions: list[TransactionResponse]
    imported_count: int = Field(description="Number of transactions persisted")
    categories_created: int = Field(description="Number of categories created by this import")
