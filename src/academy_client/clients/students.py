from __future__ import annotations

from typing import Any

from ..models import MessageResponse
from ..models_students import (
    Student,
    StudentForm,
    StudentMutationResponse,
    StudentsResponse,
    StudentStatistics,
)
from .base import BaseClient


class StudentsClient(BaseClient):
    async def list_students(self, filters: dict[str, Any] | None = None) -> StudentsResponse:
        data = await self._get("/api/students", params=filters)
        return self._parse(StudentsResponse, data or {})

    async def statistics(self, branch_id: str | None = None) -> StudentStatistics:
        data = await self._get("/api/students/statistics", params={"branchId": branch_id})
        return self._parse(StudentStatistics, data or {})

    async def get_student(self, student_id: str) -> Student:
        data = await self._get(f"/api/students/{student_id}")
        return self._parse(Student, data)

    async def create_student(self, form: StudentForm) -> StudentMutationResponse:
        data = await self._request("POST", "/api/students", json_body=form.model_dump(mode="json", by_alias=True, exclude_none=True))
        return self._parse(StudentMutationResponse, data or {})

    async def update_student(self, student_id: str, changes: dict[str, Any]) -> StudentMutationResponse:
        data = await self._request("PUT", f"/api/students/{student_id}", json_body=changes)
        return self._parse(StudentMutationResponse, data or {})

    async def delete_student(self, student_id: str) -> MessageResponse:
        data = await self._request("DELETE", f"/api/students/{student_id}")
        return self._parse(MessageResponse, data or {})
