from __future__ import annotations

import pytest

from academy_client.models import Role
from academy_client.models_finance import TransactionForm
from academy_client.views import FinancesView
from academy_client.views.finances import PendingDelete

pytestmark = pytest.mark.anyio


@pytest.fixture
def refresh_routes(recorder):
    recorder.add("GET", "/api/budgets", json_body={"budgets": [], "pagination": {"current": 1, "pages": 1, "total": 0}})
    recorder.add("GET", "/api/transactions", json_body={"transactions": []})
    recorder.add("GET", "/api/transactions/statistics", json_body={"totalTransactions": 0})
    recorder.add("GET", "/api/budgets/statistics", json_body={"totalBudgets": 2, "totalAllocated": 5000})
    return recorder


async def test_confirmed_budget_delete_refreshes_budgets_and_stats(api, refresh_routes, sign_in, fake_sleep) -> None:
    sign_in(Role.SUPER_ADMIN)
    refresh_routes.add("DELETE", "/api/budgets/bg-1", json_body={"message": "Budget deleted successfully"})

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()
    assert view.request_delete("budget", "bg-1") is True
    assert view.pending_delete == PendingDelete(kind="budget", item_id="bg-1")

    assert await view.confirm_delete() is True

    assert view.pending_delete is None
    assert view.deleting is False
    assert len(refresh_routes.calls("DELETE", "/api/budgets/bg-1")) == 1
    assert len(refresh_routes.calls("GET", "/api/budgets")) == 1
    assert len(refresh_routes.calls("GET", "/api/budgets/statistics")) == 1
    assert refresh_routes.calls("GET", "/api/transactions") == []
    assert view.budget_stats.total_budgets == 2
    assert api.notifications.messages[-1]["level"] == "success"


async def test_rejected_delete_keeps_dialog_open(api, refresh_routes, sign_in, fake_sleep) -> None:
    sign_in(Role.SUPER_ADMIN)
    refresh_routes.add("DELETE", "/api/budgets/bg-1", 409, json_body={"message": "Budget has linked transactions"})

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()
    view.request_delete("budget", "bg-1")

    assert await view.confirm_delete() is False

    assert view.pending_delete == PendingDelete(kind="budget", item_id="bg-1")
    assert view.error == "Budget has linked transactions"
    assert refresh_routes.calls("GET", "/api/budgets") == []
    assert api.notifications.messages[-1]["details"]["error_type"] == "ConflictError"


async def test_cancelled_delete_sends_nothing(api, recorder, sign_in, fake_sleep) -> None:
    sign_in(Role.ADMIN)

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()
    view.request_delete("transaction", "t-1")
    view.cancel_delete()

    assert await view.confirm_delete() is False
    assert recorder.requests == []


async def test_admin_cannot_manage_budgets(api, recorder, sign_in, fake_sleep) -> None:
    sign_in(Role.ADMIN)

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()

    assert view.can_manage_budgets is False
    assert view.can_manage_transactions is True
    assert view.request_delete("budget", "bg-1") is False
    assert view.pending_delete is None
    assert await view.refresh_budget("bg-1") is False
    assert recorder.requests == []
    assert api.notifications.messages[-1]["message"] == "Only the super administrator can manage budgets."


async def test_admin_creates_transaction(api, refresh_routes, sign_in, fake_sleep) -> None:
    sign_in(Role.ADMIN)
    refresh_routes.add(
        "POST",
        "/api/transactions",
        201,
        json_body={
            "message": "Transaction created successfully",
            "transaction": {"_id": "t-5", "type": "income", "category": "Tuition", "amount": 250},
        },
    )

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()
    form = TransactionForm(type="income", category="Tuition", amount=250, description="Term fees")

    assert await view.create_transaction(form) is True

    [post] = refresh_routes.calls("POST", "/api/transactions")
    assert refresh_routes.body(post) == {
        "type": "income",
        "category": "Tuition",
        "amount": 250.0,
        "description": "Term fees",
    }
    assert len(refresh_routes.calls("GET", "/api/transactions")) == 1
    assert refresh_routes.calls("GET", "/api/budgets") == []


async def test_transaction_filters_reset_page(api, refresh_routes, sign_in, fake_sleep, sleeps) -> None:
    sign_in(Role.ADMIN)

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()
    view.transactions.set_page(2)
    await view.transactions.wait_idle()
    view.transactions.set_filter("type", "expense")
    await view.transactions.wait_idle()

    first, second = refresh_routes.calls("GET", "/api/transactions")
    assert first.url.params["page"] == "2"
    assert second.url.params["page"] == "1"
    assert second.url.params["type"] == "expense"
    assert sleeps == [0.3, 0.3]


async def test_confirmed_transaction_delete_refreshes_transactions(api, refresh_routes, sign_in, fake_sleep) -> None:
    sign_in(Role.ADMIN)
    refresh_routes.add("DELETE", "/api/transactions/t-1", json_body={"message": "Transaction deleted successfully"})

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()
    view.request_delete("transaction", "t-1")

    assert await view.confirm_delete() is True

    assert view.pending_delete is None
    assert len(refresh_routes.calls("DELETE", "/api/transactions/t-1")) == 1
    assert len(refresh_routes.calls("GET", "/api/transactions")) == 1
    assert len(refresh_routes.calls("GET", "/api/transactions/statistics")) == 1
    assert refresh_routes.calls("GET", "/api/budgets") == []
    assert api.notifications.messages[-1]["message"] == "Transaction deleted successfully"


async def test_budget_refresh_recalculates_and_reloads(api, refresh_routes, sign_in, fake_sleep) -> None:
    sign_in(Role.SUPER_ADMIN)
    refresh_routes.add(
        "POST",
        "/api/budgets/bg-1/refresh",
        json_body={
            "message": "Budget spending updated",
            "budget": {"_id": "bg-1", "category": "Utilities", "allocated": 5000, "spent": 1200, "period": "monthly"},
        },
    )

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()

    assert await view.refresh_budget("bg-1") is True

    assert len(refresh_routes.calls("POST", "/api/budgets/bg-1/refresh")) == 1
    assert len(refresh_routes.calls("GET", "/api/budgets")) == 1
    assert api.notifications.messages[-1]["message"] == "Budget spending recalculated"


async def test_failed_budget_refresh_reloads_nothing(api, refresh_routes, sign_in, fake_sleep) -> None:
    sign_in(Role.SUPER_ADMIN)
    refresh_routes.add("POST", "/api/budgets/bg-1/refresh", 404, json_body={"message": "Budget not found"})

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()

    assert await view.refresh_budget("bg-1") is False

    assert view.error == "Budget not found"
    assert refresh_routes.calls("GET", "/api/budgets") == []
    assert api.notifications.messages[-1]["title"] == "Unable to refresh budget"


async def test_admin_cannot_refresh_budget(api, recorder, sign_in, fake_sleep) -> None:
    sign_in(Role.ADMIN)

    view = FinancesView(api, sleep=fake_sleep)
    view.mount()

    assert await view.refresh_budget("bg-1") is False
    assert recorder.requests == []
