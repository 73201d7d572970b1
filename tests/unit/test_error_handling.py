"""Unit tests for error handlers and the error catalog."""

import json
from unittest.mock import Mock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from ledger.api.middleware.error_handler import (
    handle_generic_error,
    handle_integrity_error,
    handle_ledger_error,
    handle_validation_error,
)
from ledger.core.errors import ERROR_CATALOG, get_error, is_retryable
from ledger.core.exceptions import (
    FileTooLargeError,
    InsufficientBalanceError,
    LedgerError,
    TransactionNotFoundError,
)

RESPONSE_FIELDS = {"error_code", "message", "user_message", "suggestion", "retry_allowed"}


@pytest.fixture
def request_mock():
    request = Mock(spec=Request)
    request.url.path = "/api/v1/transactions"
    request.method = "POST"
    return request


class TestLedgerErrorHandler:
    @pytest.mark.asyncio
    async def test_uses_catalog_and_status(self, request_mock):
        response = await handle_ledger_error(request_mock, InsufficientBalanceError())

        assert isinstance(response, JSONResponse)
        assert response.status_code == 400
        content = json.loads(response.body.decode())
        assert set(content) == RESPONSE_FIELDS
        assert content["error_code"] == "TXN_002"
        assert content["message"] == ERROR_CATALOG["TXN_002"]["message"]

    @pytest.mark.asyncio
    async def test_not_found_status(self, request_mock):
        response = await handle_ledger_error(request_mock, TransactionNotFoundError())

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_file_too_large_status(self, request_mock):
        response = await handle_ledger_error(request_mock, FileTooLargeError())

        assert response.status_code == 413

    @pytest.mark.asyncio
    async def test_unknown_code_falls_back(self, request_mock):
        response = await handle_ledger_error(request_mock, LedgerError("NOPE_999", http_status=418))

        content = json.loads(response.body.decode())
        assert response.status_code == 418
        assert content["error_code"] == "NOPE_999"
        assert content["user_message"] == "An unexpected error occurred."


class TestValidationErrorHandler:
    @pytest.mark.asyncio
    async def test_joins_field_messages(self, request_mock):
        exc = RequestValidationError(
            [
                {"loc": ("body", "value"), "msg": "Field required", "type": "missing"},
                {"loc": ("body", "type"), "msg": "Input should be 'income' or 'outcome'", "type": "enum"},
            ]
        )

        response = await handle_validation_error(request_mock, exc)

        content = json.loads(response.body.decode())
        assert response.status_code == 400
        assert content["error_code"] == "VAL_001"
        assert "body.value: Field required" in content["message"]
        assert " | " in content["message"]


class TestIntegrityErrorHandler:
    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(self, request_mock):
        exc = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: categories.title"))

        response = await handle_integrity_error(request_mock, exc)

        assert response.status_code == 409
        assert json.loads(response.body.decode())["error_code"] == "DB_002"

    @pytest.mark.asyncio
    async def test_other_integrity_error(self, request_mock):
        exc = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed"))

        response = await handle_integrity_error(request_mock, exc)

        assert response.status_code == 500
        assert json.loads(response.body.decode())["error_code"] == "DB_001"


class TestGenericErrorHandler:
    @pytest.mark.asyncio
    async def test_hides_details(self, request_mock):
        response = await handle_generic_error(request_mock, RuntimeError("secret internals"))

        content = json.loads(response.body.decode())
        assert response.status_code == 500
        assert content["error_code"] == "SYS_001"
        assert "secret" not in response.body.decode()


class TestErrorCatalog:
    def test_entries_are_complete(self):
        for code, entry in ERROR_CATALOG.items():
            assert entry["code"] == code
            assert set(entry) == {"code", "message", "user_message", "suggestion", "retry_allowed"}

    def test_unknown_code(self):
        assert get_error("MISSING")["code"] == "UNKNOWN"
        assert is_retryable("MISSING") is True

    def test_exception_defaults(self):
        exc = TransactionNotFoundError(details={"transaction_id": "x"})

        assert exc.error_code == "TXN_003"
        assert exc.http_status == 404
        assert exc.details == {"transaction_id": "x"}
        assert str(exc) == "TXN_003"
