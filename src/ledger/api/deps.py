"""FastAPI dependency injection for database-backed services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.db.session import get_db
from ledger.repositories.category import CategoryRepository
from ledger.services.importer import TransactionImportService
from ledger.services.transaction import TransactionService


async def get_transaction_service(
    db: AsyncSession = Depends(get_db),
) -> TransactionService:
    return TransactionService(db)


async def get_import_service(
    db: AsyncSession = Depends(get_db),
) -> TransactionImportService:
    return TransactionImportService(db)


async def get_category_repository(
    db: AsyncSession = Depends(get_db),
) -> CategoryRepository:
    return CategoryRepository(db)
