from __future__ import annotations

from typing import Any, Sequence

from ..downloads import DownloadedFile, default_export_filename
from ..models import MessageResponse
from ..models_attendance import (
    AttendanceEntry,
    AttendanceMark,
    AttendanceRecord,
    AttendanceRecordsResponse,
    AttendanceStatsResponse,
    CourseStudentsResponse,
)
from .base import BaseClient


class AttendanceClient(BaseClient):
    async def list_records(self, filters: dict[str, Any] | None = None) -> AttendanceRecordsResponse:
        data = await self._get("/api/attendance", params=filters)
        return self._parse(AttendanceRecordsResponse, data or {})

    async def course_students(
        self,
        course_id: str,
        date: str | None = None,
        branch_id: str | None = None,
    ) -> CourseStudentsResponse:
        data = await self._get(
            f"/api/attendance/students/{course_id}",
            params={"date": date, "branchId": branch_id},
        )
        return self._parse(CourseStudentsResponse, data or {})

    async def stats(self, course_id: str, date: str, branch_id: str | None = None) -> AttendanceStatsResponse:
        data = await self._get(
            f"/api/attendance/stats/{course_id}",
            params={"date": date, "branchId": branch_id},
        )
        return self._parse(AttendanceStatsResponse, data or {})

    async def mark(self, entry: AttendanceEntry) -> AttendanceRecord | None:
        data = await self._request("POST", "/api/attendance", json_body=entry.model_dump(mode="json", by_alias=True, exclude_none=True))
        record = (data or {}).get("attendance")
        return self._parse(AttendanceRecord, record) if record else None

    async def bulk_mark(self, entries: Sequence[AttendanceEntry]) -> dict[str, Any]:
        payload = {"attendanceRecords": [entry.model_dump(mode="json", by_alias=True, exclude_none=True) for entry in entries]}
        data = await self._request("POST", "/api/attendance/bulk", json_body=payload)
        return data or {}

    async def update_record(self, attendance_id: str, changes: AttendanceMark) -> AttendanceRecord | None:
        data = await self._request(
            "PUT",
            f"/api/attendance/{attendance_id}",
            json_body=changes.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        record = (data or {}).get("attendance")
        return self._parse(AttendanceRecord, record) if record else None

    async def delete_record(self, attendance_id: str) -> MessageResponse:
        data = await self._request("DELETE", f"/api/attendance/{attendance_id}")
        return self._parse(MessageResponse, data or {})

    async def export_records(self, filters: dict[str, Any]) -> DownloadedFile:
        return await self.http.download(
            "/api/attendance/export",
            params=filters,
            default_filename=default_export_filename("attendance"),
        )
