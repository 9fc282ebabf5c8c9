from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from ..downloads import DownloadedFile, default_export_filename
from ..models_courses import CourseStatistics
from ..models_finance import BudgetStatistics, TransactionStatistics
from ..models_reports import (
    AttendanceSummary,
    ComprehensiveReport,
    DashboardStats,
    FinancialSummary,
    ReportFilters,
    ReportType,
    StudentPerformanceSummary,
)
from ..models_students import StudentStatistics
from ..retry import retryable
from .base import BaseClient


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ReportsClient(BaseClient):
    @retryable
    async def dashboard_stats(self, filters: ReportFilters | None = None) -> DashboardStats:
        data = await self._get("/api/dashboard/stats", params=(filters or ReportFilters()).as_params())
        return self._parse(DashboardStats, data or {})

    async def comprehensive(self, filters: ReportFilters | None = None) -> ComprehensiveReport:
        params = (filters or ReportFilters()).as_params()
        data = dict(await self._get("/api/reports/comprehensive", params=params) or {})
        data.setdefault("generatedAt", _now())
        if not data.get("filters"):
            data["filters"] = params
        return self._parse(ComprehensiveReport, data)

    async def student_statistics(self, filters: ReportFilters | None = None) -> StudentStatistics:
        data = await self._get("/api/reports/student-performance", params=(filters or ReportFilters()).as_params())
        return self._parse(StudentStatistics, (data or {}).get("studentStats") or {})

    async def transaction_statistics(self, filters: ReportFilters | None = None) -> TransactionStatistics:
        data = await self._get("/api/reports/financial-summary", params=(filters or ReportFilters()).as_params())
        return self._parse(TransactionStatistics, (data or {}).get("transactionStats") or {})

    async def course_statistics(self, filters: ReportFilters | None = None) -> CourseStatistics:
        return (await self.comprehensive(filters)).course_stats

    async def budget_statistics(self, filters: ReportFilters | None = None) -> BudgetStatistics:
        return (await self.comprehensive(filters)).budget_stats

    async def student_performance_summary(self, filters: ReportFilters | None = None) -> StudentPerformanceSummary:
        students, courses = await asyncio.gather(
            self.student_statistics(filters),
            self.course_statistics(filters),
        )
        per_course = round(courses.total_enrolled / courses.total_courses) if courses.total_courses > 0 else 0
        return StudentPerformanceSummary(
            total_students=students.total_students,
            active_students=students.active_students,
            graduated_students=students.graduated_students,
            average_gpa=students.average_gpa,
            total_courses=courses.total_courses,
            active_courses=courses.active_courses,
            total_enrolled=courses.total_enrolled,
            average_enrollment_per_course=per_course,
            generated_at=_now(),
        )

    async def financial_summary(self, filters: ReportFilters | None = None) -> FinancialSummary:
        transactions, budgets, dashboard = await asyncio.gather(
            self.transaction_statistics(filters),
            self.budget_statistics(filters),
            self.dashboard_stats(filters),
        )
        return FinancialSummary(
            total_income=transactions.total_income,
            total_expenses=transactions.total_expenses,
            net_profit=transactions.net_profit,
            pending_income=transactions.pending_income,
            pending_expenses=transactions.pending_expenses,
            total_budgets=budgets.total_budgets,
            total_allocated=budgets.total_allocated,
            total_spent=budgets.total_spent,
            budget_utilization=budgets.overall_utilization,
            monthly_revenue=dashboard.financial_stats.monthly_revenue,
            monthly_expenses=dashboard.financial_stats.monthly_expenses,
            growth_rate=dashboard.financial_stats.growth_rate,
            generated_at=_now(),
        )

    async def attendance_summary(self, filters: ReportFilters | None = None) -> AttendanceSummary:
        stats = (await self.dashboard_stats(filters)).attendance_stats
        trend = "improving" if stats.weekly_average > stats.monthly_average else "declining"
        return AttendanceSummary(
            today_attendance=stats.today_attendance,
            weekly_average=stats.weekly_average,
            monthly_average=stats.monthly_average,
            total_students=stats.total_students,
            attendance_trend=trend,
            generated_at=_now(),
        )

    async def export(self, report_type: ReportType, filters: ReportFilters | None = None) -> DownloadedFile:
        params = {**(filters or ReportFilters()).as_params(), "format": "excel", "type": report_type}
        return await self.http.download(
            "/api/reports/export",
            params=params,
            default_filename=default_export_filename(report_type),
        )
