"""Database models."""
from ledger.models.category import Category
from ledger.models.transaction import Transaction, TransactionType

__all__ = ["Category", "Transaction", "TransactionType"]
