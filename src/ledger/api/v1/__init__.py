"""API version 1 routes."""

from fastapi import APIRouter

from ledger.api.v1 import categories, transactions

router = APIRouter(prefix="/api/v1")

router.include_router(transactions.router)
router.include_router(categories.router)
