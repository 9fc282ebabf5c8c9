from __future__ import annotations

from pathlib import Path

from ..downloads import DownloadedFile
from ..models_reports import (
    AttendanceSummary,
    ComprehensiveReport,
    FinancialSummary,
    ReportFilters,
    ReportType,
    StudentPerformanceSummary,
)
from ..navigation import Route
from ..permissions import Action
from ..session import ApiSession
from .base import BaseView


class ReportsView(BaseView):
    module = "reports"
    route = Route.REPORTS

    def __init__(self, api: ApiSession, download_dir: Path | None = None) -> None:
        super().__init__(api)
        self.filters = ReportFilters(period="monthly")
        self.download_dir = download_dir
        self.report: ComprehensiveReport | None = None
        self.student_summary: StudentPerformanceSummary | None = None
        self.financial_summary: FinancialSummary | None = None
        self.attendance_summary: AttendanceSummary | None = None
        self.loading = False
        self.exporting = False
        self.last_export: Path | None = None

    def _effective_filters(self) -> ReportFilters:
        if self.can(Action.SELECT_BRANCH):
            return self.filters
        return self.filters.model_copy(update={"branch_id": None})

    def update_filters(self, **changes: object) -> None:
        self.filters = self.filters.model_copy(update=changes)

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            report = await self._guarded(
                "Unable to load report",
                self.api.reports_client().comprehensive(self._effective_filters()),
            )
        finally:
            self.loading = False
        if report is not None:
            self.report = report

    async def export(self, report_type: ReportType = "comprehensive") -> DownloadedFile | None:
        """Download the spreadsheet; nothing is written when the request fails."""
        self.exporting = True
        try:
            downloaded = await self._guarded(
                "Export failed",
                self.api.reports_client().export(report_type, self._effective_filters()),
            )
        finally:
            self.exporting = False
        if downloaded is None:
            self._log(f"reports.export.{report_type}", "error")
            return None
        if self.download_dir is not None:
            self.last_export = downloaded.save(self.download_dir)
        self._log(f"reports.export.{report_type}", "ok")
        self.notifications.success("Export complete", f"Saved {downloaded.filename}")
        return downloaded

    async def generate_student_performance(self) -> StudentPerformanceSummary | None:
        summary = await self._guarded(
            "Unable to generate report",
            self.api.reports_client().student_performance_summary(self._effective_filters()),
        )
        if summary is not None:
            self.student_summary = summary
        return summary

    async def generate_financial_summary(self) -> FinancialSummary | None:
        summary = await self._guarded(
            "Unable to generate report",
            self.api.reports_client().financial_summary(self._effective_filters()),
        )
        if summary is not None:
            self.financial_summary = summary
        return summary

    async def generate_attendance_summary(self) -> AttendanceSummary | None:
        summary = await self._guarded(
            "Unable to generate report",
            self.api.reports_client().attendance_summary(self._effective_filters()),
        )
        if summary is not None:
            self.attendance_summary = summary
        return summary
