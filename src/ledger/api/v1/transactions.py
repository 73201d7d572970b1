"""Transaction endpoints: list with balance, create, delete and CSV import."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status

from ledger.api.deps import get_import_service, get_transaction_service
from ledger.config import settings
from ledger.core.exceptions import FileTooLargeError, InvalidFileTypeError
from ledger.schemas.common import ErrorResponse, MessageResponse
from ledger.schemas.transaction import (
    BalanceResponse,
    TransactionCreateRequest,
    TransactionImportResult,
    TransactionListResult,
    TransactionResponse,
)
from ledger.services.importer import TransactionImportService
from ledger.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get(
    "",
    response_model=TransactionListResult,
    summary="List transactions with balance",
)
async def list_transactions(
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResult:
    """
    List every transaction, newest first, with the balance computed over all
    persisted transactions.
    """
    transactions, balance = await service.list_with_balance()
    return TransactionListResult(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        balance=BalanceResponse.model_validate(balance),
        currency=settings.currency,
    )


@router.get("/balance", response_model=BalanceResponse, summary="Current balance")
async def get_balance(
    service: TransactionService = Depends(get_transaction_service),
) -> BalanceResponse:
    balance = await service.get_balance()
    return BalanceResponse.model_validate(balance)


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_transaction(
    transaction_id: UUID,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    transaction = await service.get_transaction(transaction_id)
    return TransactionResponse.model_validate(transaction)


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a transaction",
    description="""
    Record a single income or outcome transaction.

    The category is looked up by title and created when it doesn't exist yet.

    ## Error Codes
    - TXN_001: Value is zero or negative
    - TXN_002: Outcome exceeds the current balance
    """,
    responses={400: {"model": ErrorResponse}},
)
async def create_transaction(
    payload: TransactionCreateRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    transaction = await service.create_transaction(
        title=payload.title,
        value=payload.value,
        transaction_type=payload.type,
        category_title=payload.category,
    )
    return TransactionResponse.model_validate(transaction)


@router.delete(
    "/{transaction_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_transaction(
    transaction_id: UUID,
    service: TransactionService = Depends(get_transaction_service),
) -> MessageResponse:
    await service.delete_transaction(transaction_id)
    return MessageResponse(message="Transaction deleted successfully")


@router.post(
    "/import",
    response_model=TransactionImportResult,
    status_code=status.HTTP_201_CREATED,
    summary="Import transactions from CSV",
    description="""
    Upload a CSV file (multipart field `file`) with the columns
    `title,type,value,category`. The first line is treated as a header.

    The import is all-or-nothing.

    ## Error Codes
    - IMP_001: A row has a zero or negative value
    - IMP_002: The batch's net outcome exceeds the current balance
    - IMP_003: The file could not be parsed
    - IMP_004: Not a .csv file
    - IMP_005: File too large
    """,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
    },
)
async def import_transactions(
    file: UploadFile = File(...),
    service: TransactionImportService = Depends(get_import_service),
) -> TransactionImportResult:
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise InvalidFileTypeError(details={"filename": file.filename})

    max_bytes = settings.csv_max_size_mb * 1024 * 1024
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise FileTooLargeError(details={"max_size_mb": settings.csv_max_size_mb})

    result = await service.import_csv(content, filename=file.filename)
    return TransactionImportResult(
        transactions=[TransactionResponse.model_validate(t) for t in result.transactions],
        imported_count=result.imported_count,
        categories_created=result.categories_created,
    )
