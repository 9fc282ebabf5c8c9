from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import AliasChoices, Field

from .models import BranchRef, MirrorModel, Pagination, PersonRef

TransactionType = Literal["income", "expense"]
TransactionStatus = Literal["pending", "completed", "cancelled"]
BudgetPeriod = Literal["monthly", "quarterly", "yearly"]
BudgetStatus = Literal["active", "inactive", "completed", "exceeded"]


class StudentRef(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    full_name: str | None = None
    student_id: str | None = None


class CourseTitleRef(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str = ""


class Transaction(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    type: TransactionType
    category: str
    amount: float
    currency: str | None = None
    description: str = ""
    date: str | None = None
    status: TransactionStatus = "pending"
    reference: str | None = None
    student: Optional[StudentRef] = None
    course: Optional[CourseTitleRef] = None
    branch: Optional[BranchRef] = None
    created_by: Optional[PersonRef] = None
    updated_by: Optional[PersonRef] = None
    is_active: bool | None = None


class Budget(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    category: str
    allocated: float
    spent: float = 0
    currency: str | None = None
    period: BudgetPeriod
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    status: BudgetStatus = "active"
    branch: Optional[BranchRef] = None
    created_by: Optional[PersonRef] = None
    updated_by: Optional[PersonRef] = None
    is_active: bool | None = None
    # computed by the server; never recomputed here
    remaining: float | None = None
    utilization_percentage: float | None = None
    budget_status: Literal["good", "moderate", "warning", "exceeded"] | None = None


class TransactionsResponse(MirrorModel):
    transactions: List[Transaction] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class BudgetsResponse(MirrorModel):
    budgets: List[Budget] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class TransactionStatistics(MirrorModel):
    total_transactions: int = 0
    total_income: float = 0
    total_expenses: float = 0
    pending_income: float = 0
    pending_expenses: float = 0
    pending_transactions: int = 0
    net_profit: float = 0


class BudgetStatistics(MirrorModel):
    total_budgets: int = 0
    total_allocated: float = 0
    total_spent: float = 0
    active_budgets: int = 0
    exceeded_budgets: int = 0
    total_remaining: float = 0
    overall_utilization: float = 0


class TransactionForm(MirrorModel):
    type: TransactionType
    category: str
    amount: float
    description: str
    date: str | None = None
    status: TransactionStatus | None = None
    reference: str | None = None
    student: str | None = None
    course: str | None = None
    branch: str | None = None


class BudgetForm(MirrorModel):
    category: str
    allocated: float
    period: BudgetPeriod
    start_date: str
    end_date: str
    description: str | None = None
    status: BudgetStatus | None = None
    branch: str | None = None


class TransactionMutationResponse(MirrorModel):
    message: str = ""
    transaction: Optional[Transaction] = None


class BudgetMutationResponse(MirrorModel):
    message: str = ""
    budget: Optional[Budget] = None
