from __future__ import annotations

from typing import Any

from ..models import MessageResponse
from ..models_courses import Course, CourseForm, CourseMutationResponse, CoursesResponse, CourseStatistics
from .base import BaseClient


class CoursesClient(BaseClient):
    async def list_courses(self, filters: dict[str, Any] | None = None) -> CoursesResponse:
        data = await self._get("/api/courses", params=filters)
        return self._parse(CoursesResponse, data or {})

    async def statistics(self, branch_id: str | None = None) -> CourseStatistics:
        data = await self._get("/api/courses/statistics", params={"branchId": branch_id})
        return self._parse(CourseStatistics, data or {})

    async def get_course(self, course_id: str) -> Course:
        data = await self._get(f"/api/courses/{course_id}")
        return self._parse(Course, data)

    async def create_course(self, form: CourseForm) -> CourseMutationResponse:
        data = await self._request("POST", "/api/courses", json_body=form.model_dump(mode="json", by_alias=True, exclude_none=True))
        return self._parse(CourseMutationResponse, data or {})

    async def update_course(self, course_id: str, changes: dict[str, Any]) -> CourseMutationResponse:
        data = await self._request("PUT", f"/api/courses/{course_id}", json_body=changes)
        return self._parse(CourseMutationResponse, data or {})

    async def delete_course(self, course_id: str) -> MessageResponse:
        data = await self._request("DELETE", f"/api/courses/{course_id}")
        return self._parse(MessageResponse, data or {})

    async def restore_course(self, course_id: str) -> MessageResponse:
        data = await self._request("POST", f"/api/courses/{course_id}/restore")
        return self._parse(MessageResponse, data or {})
