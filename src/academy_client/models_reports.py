from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import Field

from .models import BranchRef, MirrorModel
from .models_courses import CourseStatistics
from .models_finance import BudgetStatistics, TransactionStatistics
from .models_students import StudentStatistics

ReportType = Literal["comprehensive", "students", "courses", "financial", "attendance"]
ReportPeriod = Literal["monthly", "quarterly", "yearly"]


class UserStats(MirrorModel):
    total: int = 0
    recent: int = 0
    by_role: Dict[str, int] = Field(default_factory=dict)


class FinancialStats(MirrorModel):
    monthly_revenue: float = 0
    monthly_expenses: float = 0
    net_profit: float = 0
    pending_payments: float = 0
    growth_rate: float = 0


class DashboardAttendanceStats(MirrorModel):
    today_attendance: float = 0
    weekly_average: float = 0
    monthly_average: float = 0
    total_students: int = 0


class BranchStats(MirrorModel):
    total_branches: int = 0
    total_system_users: int = 0
    average_users_per_branch: float = 0


class DashboardStats(MirrorModel):
    branch_info: Optional[BranchRef] = None
    user_stats: UserStats = Field(default_factory=UserStats)
    course_stats: CourseStatistics = Field(default_factory=CourseStatistics)
    financial_stats: FinancialStats = Field(default_factory=FinancialStats)
    attendance_stats: DashboardAttendanceStats = Field(default_factory=DashboardAttendanceStats)
    branch_stats: Optional[BranchStats] = None
    last_updated: str | None = None


class RecentActivity(MirrorModel):
    id: str
    type: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
    timestamp: str


class EnrollmentPoint(MirrorModel):
    month: str
    year: int | None = None
    new_users: int | None = None
    enrollments: int | None = None
    graduations: int | None = None
    dropouts: int | None = None


class RoleSlice(MirrorModel):
    name: str
    value: int
    color: str | None = None


class ReportFilters(MirrorModel):
    branch_id: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    period: ReportPeriod | None = None
    course_id: str | None = None
    student_id: str | None = None

    def as_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ComprehensiveReport(MirrorModel):
    branch_info: Optional[BranchRef] = None
    user_stats: UserStats = Field(default_factory=UserStats)
    student_stats: StudentStatistics = Field(default_factory=StudentStatistics)
    course_stats: CourseStatistics = Field(default_factory=CourseStatistics)
    transaction_stats: TransactionStatistics = Field(default_factory=TransactionStatistics)
    budget_stats: BudgetStatistics = Field(default_factory=BudgetStatistics)
    generated_at: str | None = None
    filters: Dict[str, Any] = Field(default_factory=dict)


class StudentPerformanceSummary(MirrorModel):
    total_students: int
    active_students: int
    graduated_students: int
    average_gpa: float | None = None
    total_courses: int
    active_courses: int
    total_enrolled: int
    average_enrollment_per_course: int
    generated_at: str


class FinancialSummary(MirrorModel):
    total_income: float
    total_expenses: float
    net_profit: float
    pending_income: float
    pending_expenses: float
    total_budgets: int
    total_allocated: float
    total_spent: float
    budget_utilization: float
    monthly_revenue: float
    monthly_expenses: float
    growth_rate: float
    generated_at: str


class AttendanceSummary(MirrorModel):
    today_attendance: float
    weekly_average: float
    monthly_average: float
    total_students: int
    attendance_trend: Literal["improving", "declining"]
    generated_at: str

