from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Literal

from ..models_finance import (
    BudgetForm,
    BudgetsResponse,
    BudgetStatistics,
    TransactionForm,
    TransactionsResponse,
    TransactionStatistics,
)
from ..navigation import Route
from ..permissions import Action
from ..refetch import FilteredListing, Sleep
from ..session import ApiSession
from .base import BaseView

TRANSACTION_FILTERS: dict[str, Any] = {
    "search": None,
    "type": None,
    "category": None,
    "status": None,
    "startDate": None,
    "endDate": None,
    "branchId": None,
    "page": 1,
    "limit": 10,
}

BUDGET_FILTERS: dict[str, Any] = {
    "category": None,
    "period": None,
    "status": None,
    "branchId": None,
    "page": 1,
    "limit": 10,
}

EntryKind = Literal["transaction", "budget"]


@dataclass(frozen=True)
class PendingDelete:
    kind: EntryKind
    item_id: str


class FinancesView(BaseView):
    module = "finances"
    route = Route.FINANCES

    def __init__(self, api: ApiSession, sleep: Sleep = asyncio.sleep) -> None:
        super().__init__(api)
        self.transactions: FilteredListing[TransactionsResponse] = FilteredListing(
            self._fetch_transactions,
            initial_filters=TRANSACTION_FILTERS,
            debounce_ms=api.config.debounce_ms,
            notifications=self.notifications,
            title="Unable to load transactions",
            sleep=sleep,
        )
        self.budgets: FilteredListing[BudgetsResponse] = FilteredListing(
            self._fetch_budgets,
            initial_filters=BUDGET_FILTERS,
            debounce_ms=api.config.debounce_ms,
            notifications=self.notifications,
            title="Unable to load budgets",
            sleep=sleep,
        )
        self.transaction_stats: TransactionStatistics | None = None
        self.budget_stats: BudgetStatistics | None = None
        self.pending_delete: PendingDelete | None = None
        self.deleting = False

    async def _fetch_transactions(self, filters: dict[str, Any]) -> TransactionsResponse:
        return await self.api.finance_client().list_transactions(filters)

    async def _fetch_budgets(self, filters: dict[str, Any]) -> BudgetsResponse:
        return await self.api.finance_client().list_budgets(filters)

    @property
    def can_manage_transactions(self) -> bool:
        return self.can(Action.MANAGE_TRANSACTIONS)

    @property
    def can_manage_budgets(self) -> bool:
        return self.can(Action.MANAGE_BUDGETS)

    def _stats_filters(self) -> dict[str, Any]:
        return {"branchId": self.transactions.filters.get("branchId")}

    async def load(self) -> None:
        await asyncio.gather(self.transactions.refresh(), self.budgets.refresh(), self.load_statistics())

    async def load_statistics(self) -> None:
        client = self.api.finance_client()
        transaction_stats, budget_stats = await asyncio.gather(
            self._guarded("Unable to load statistics", client.transaction_statistics(self._stats_filters())),
            self._guarded("Unable to load statistics", client.budget_statistics(self._stats_filters())),
        )
        if transaction_stats is not None:
            self.transaction_stats = transaction_stats
        if budget_stats is not None:
            self.budget_stats = budget_stats

    async def _after_mutation(self, kind: EntryKind) -> None:
        listing = self.budgets if kind == "budget" else self.transactions
        await asyncio.gather(listing.refresh(), self.load_statistics())

    async def create_transaction(self, form: TransactionForm) -> bool:
        if not self._require(Action.MANAGE_TRANSACTIONS):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to save transaction", self.api.finance_client().create_transaction(form))
        return await self._finish_mutation("transaction", "Transaction created successfully", ok)

    async def update_transaction(self, transaction_id: str, changes: dict[str, Any]) -> bool:
        if not self._require(Action.MANAGE_TRANSACTIONS):
            return False
        self.error = None
        ok, _ = await self._attempt(
            "Unable to save transaction",
            self.api.finance_client().update_transaction(transaction_id, changes),
        )
        return await self._finish_mutation("transaction", "Transaction updated successfully", ok)

    async def create_budget(self, form: BudgetForm) -> bool:
        if not self._require(Action.MANAGE_BUDGETS):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to save budget", self.api.finance_client().create_budget(form))
        return await self._finish_mutation("budget", "Budget created successfully", ok)

    async def update_budget(self, budget_id: str, changes: dict[str, Any]) -> bool:
        if not self._require(Action.MANAGE_BUDGETS):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to save budget", self.api.finance_client().update_budget(budget_id, changes))
        return await self._finish_mutation("budget", "Budget updated successfully", ok)

    async def refresh_budget(self, budget_id: str) -> bool:
        if not self._require(Action.MANAGE_BUDGETS):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to refresh budget", self.api.finance_client().refresh_budget(budget_id))
        return await self._finish_mutation("budget", "Budget spending recalculated", ok)

    async def _finish_mutation(self, kind: EntryKind, message: str, ok: bool) -> bool:
        if not ok:
            self._log(f"{kind}.save", "error")
            return False
        self._log(f"{kind}.save", "ok")
        self.notifications.success("Saved", message)
        await self._after_mutation(kind)
        return True

    def request_delete(self, kind: EntryKind, item_id: str) -> bool:
        action = Action.MANAGE_BUDGETS if kind == "budget" else Action.MANAGE_TRANSACTIONS
        if not self._require(action):
            return False
        self.pending_delete = PendingDelete(kind=kind, item_id=item_id)
        return True

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        pending = self.pending_delete
        if pending is None:
            return False
        client = self.api.finance_client()
        operation = (
            client.delete_budget(pending.item_id)
            if pending.kind == "budget"
            else client.delete_transaction(pending.item_id)
        )
        self.error = None
        self.deleting = True
        try:
            ok, _ = await self._attempt(f"Unable to delete {pending.kind}", operation)
        finally:
            self.deleting = False
        if not ok:
            self._log(f"{pending.kind}.delete", "error")
            return False
        self.pending_delete = None
        self._log(f"{pending.kind}.delete", "ok")
        self.notifications.success("Deleted", f"{pending.kind.capitalize()} deleted successfully")
        await self._after_mutation(pending.kind)
        return True
