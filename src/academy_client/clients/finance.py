from __future__ import annotations

from typing import Any

from ..models import MessageResponse
from ..models_finance import (
    Budget,
    BudgetForm,
    BudgetMutationResponse,
    BudgetsResponse,
    BudgetStatistics,
    Transaction,
    TransactionForm,
    TransactionMutationResponse,
    TransactionsResponse,
    TransactionStatistics,
)
from .base import BaseClient


class FinanceClient(BaseClient):
    async def list_transactions(self, filters: dict[str, Any] | None = None) -> TransactionsResponse:
        data = await self._get("/api/transactions", params=filters)
        return self._parse(TransactionsResponse, data or {})

    async def transaction_statistics(self, filters: dict[str, Any] | None = None) -> TransactionStatistics:
        data = await self._get("/api/transactions/statistics", params=filters)
        return self._parse(TransactionStatistics, data or {})

    async def get_transaction(self, transaction_id: str) -> Transaction:
        data = await self._get(f"/api/transactions/{transaction_id}")
        return self._parse(Transaction, data)

    async def create_transaction(self, form: TransactionForm) -> TransactionMutationResponse:
        data = await self._request(
            "POST",
            "/api/transactions",
            json_body=form.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return self._parse(TransactionMutationResponse, data or {})

    async def update_transaction(self, transaction_id: str, changes: dict[str, Any]) -> TransactionMutationResponse:
        data = await self._request("PUT", f"/api/transactions/{transaction_id}", json_body=changes)
        return self._parse(TransactionMutationResponse, data or {})

    async def delete_transaction(self, transaction_id: str) -> MessageResponse:
        data = await self._request("DELETE", f"/api/transactions/{transaction_id}")
        return self._parse(MessageResponse, data or {})

    async def list_budgets(self, filters: dict[str, Any] | None = None) -> BudgetsResponse:
        data = await self._get("/api/budgets", params=filters)
        return self._parse(BudgetsResponse, data or {})

    async def budget_statistics(self, filters: dict[str, Any] | None = None) -> BudgetStatistics:
        data = await self._get("/api/budgets/statistics", params=filters)
        return self._parse(BudgetStatistics, data or {})

    async def get_budget(self, budget_id: str) -> Budget:
        data = await self._get(f"/api/budgets/{budget_id}")
        return self._parse(Budget, data)

    async def create_budget(self, form: BudgetForm) -> BudgetMutationResponse:
        data = await self._request("POST", "/api/budgets", json_body=form.model_dump(mode="json", by_alias=True, exclude_none=True))
        return self._parse(BudgetMutationResponse, data or {})

    async def update_budget(self, budget_id: str, changes: dict[str, Any]) -> BudgetMutationResponse:
        data = await self._request("PUT", f"/api/budgets/{budget_id}", json_body=changes)
        return self._parse(BudgetMutationResponse, data or {})

    async def delete_budget(self, budget_id: str) -> MessageResponse:
        data = await self._request("DELETE", f"/api/budgets/{budget_id}")
        return self._parse(MessageResponse, data or {})

    async def refresh_budget(self, budget_id: str) -> BudgetMutationResponse:
        data = await self._request("POST", f"/api/budgets/{budget_id}/refresh")
        return self._parse(BudgetMutationResponse, data or {})
