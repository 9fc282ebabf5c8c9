from __future__ import annotations

import asyncio
from datetime import date, datetime
from typing import Any, Callable

from ..downloads import DownloadedFile
from ..models_attendance import (
    AttendanceEntry,
    AttendanceMark,
    AttendanceRecord,
    AttendanceRecordsResponse,
    AttendanceStats,
    AttendanceStatus,
    StudentWithAttendance,
)
from ..navigation import Route
from ..permissions import Action
from ..refetch import FilteredListing, Sleep
from ..session import ApiSession
from .base import BaseView

RECORD_FILTERS: dict[str, Any] = {
    "courseId": None,
    "branchId": None,
    "studentId": None,
    "status": None,
    "dateFrom": None,
    "dateTo": None,
    "page": 1,
    "limit": 10,
}


class AttendanceView(BaseView):
    """Daily marking sheet for one course plus the filtered history of records."""

    module = "attendance"
    route = Route.ATTENDANCE

    def __init__(
        self,
        api: ApiSession,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(api)
        self._clock = clock
        self.course_id: str | None = None
        self.date = clock().date().isoformat()
        self.selected_branch: str | None = None
        self.students: list[StudentWithAttendance] = []
        self.stats: AttendanceStats | None = None
        self.loading = False
        self.exporting = False
        self.records: FilteredListing[AttendanceRecordsResponse] = FilteredListing(
            self._fetch_records,
            initial_filters=RECORD_FILTERS,
            debounce_ms=api.config.debounce_ms,
            notifications=self.notifications,
            title="Unable to load attendance records",
            sleep=sleep,
        )

    async def _fetch_records(self, filters: dict[str, Any]) -> AttendanceRecordsResponse:
        return await self.api.attendance_client().list_records(filters)

    @property
    def can_mark(self) -> bool:
        return self.can(Action.MARK_ATTENDANCE)

    @property
    def can_edit(self) -> bool:
        return self.can(Action.EDIT_ATTENDANCE)

    def _branch_param(self) -> str | None:
        if self.can(Action.SELECT_BRANCH):
            return self.selected_branch
        return None

    async def select_course(
        self,
        course_id: str,
        on_date: date | str | None = None,
        branch_id: str | None = None,
    ) -> None:
        self.course_id = course_id
        if on_date is not None:
            self.date = on_date.isoformat() if isinstance(on_date, date) else on_date
        if branch_id is not None:
            self.selected_branch = branch_id or None
        await self.load_course()

    async def load_course(self) -> None:
        if not self.course_id:
            return
        self.loading = True
        try:
            await asyncio.gather(self.load_students(), self.load_stats())
        finally:
            self.loading = False

    async def load_students(self) -> None:
        if not self.course_id:
            return
        response = await self._guarded(
            "Unable to load students",
            self.api.attendance_client().course_students(self.course_id, self.date, self._branch_param()),
        )
        if response is not None:
            self.students = response.students

    async def load_stats(self) -> None:
        if not self.course_id:
            return
        response = await self._guarded(
            "Unable to load attendance statistics",
            self.api.attendance_client().stats(self.course_id, self.date, self._branch_param()),
        )
        if response is not None:
            self.stats = response.stats

    def _row(self, student_id: str) -> StudentWithAttendance | None:
        for row in self.students:
            if row.id == student_id:
                return row
        return None

    def _entry(self, student_id: str, status: AttendanceStatus, time_in: str | None, notes: str | None) -> AttendanceEntry:
        if time_in is None and status.records_time:
            time_in = self._clock().strftime("%H:%M")
        return AttendanceEntry(
            student=student_id,
            course=self.course_id or "",
            date=self.date,
            status=status,
            time_in=time_in if status.records_time else None,
            notes=notes,
        )

    async def mark(
        self,
        student_id: str,
        status: AttendanceStatus | str,
        time_in: str | None = None,
        notes: str | None = None,
    ) -> AttendanceRecord | None:
        if not self._require(Action.MARK_ATTENDANCE) or not self.course_id:
            return None
        entry = self._entry(student_id, AttendanceStatus(status), time_in, notes)
        self.error = None
        row = self._row(student_id)
        previous = row.attendance if row is not None else None
        if row is not None:
            row.attendance = AttendanceMark(status=entry.status, time_in=entry.time_in, notes=entry.notes)

        ok, record = await self._attempt("Unable to mark attendance", self.api.attendance_client().mark(entry))
        if not ok:
            if row is not None:
                row.attendance = previous
            self._log(Action.MARK_ATTENDANCE.value, "error")
            return None
        self._log(Action.MARK_ATTENDANCE.value, "ok")
        await self.load_stats()
        return record

    async def mark_all(self, status: AttendanceStatus | str) -> bool:
        if not self._require(Action.MARK_ATTENDANCE) or not self.course_id or not self.students:
            return False
        parsed = AttendanceStatus(status)
        entries = [self._entry(row.id, parsed, None, None) for row in self.students]
        self.error = None
        ok, _ = await self._attempt("Unable to mark attendance", self.api.attendance_client().bulk_mark(entries))
        if not ok:
            self._log("attendance.bulk_mark", "error")
            return False
        self._log("attendance.bulk_mark", "ok")
        await self.load_course()
        return True

    async def update_record(self, attendance_id: str, changes: AttendanceMark) -> AttendanceRecord | None:
        if not self._require(Action.EDIT_ATTENDANCE):
            return None
        self.error = None
        ok, record = await self._attempt(
            "Unable to update attendance",
            self.api.attendance_client().update_record(attendance_id, changes),
        )
        if not ok:
            self._log(Action.EDIT_ATTENDANCE.value, "error")
            return None
        self._log(Action.EDIT_ATTENDANCE.value, "ok")
        await asyncio.gather(self.records.refresh(), self.load_stats())
        return record

    async def delete_record(self, attendance_id: str) -> bool:
        if not self._require(Action.EDIT_ATTENDANCE):
            return False
        self.error = None
        ok, _ = await self._attempt(
            "Unable to delete attendance",
            self.api.attendance_client().delete_record(attendance_id),
        )
        if not ok:
            return False
        await asyncio.gather(self.records.refresh(), self.load_stats())
        return True

    async def export(self, filters: dict[str, Any] | None = None) -> DownloadedFile | None:
        params = dict(filters or {})
        params.setdefault("courseId", self.course_id)
        params.setdefault("branchId", self._branch_param())
        self.exporting = True
        try:
            return await self._guarded("Export failed", self.api.attendance_client().export_records(params))
        finally:
            self.exporting = False

    def set_filters(self, **changes: Any) -> None:
        self.records.update_filters(**changes)

