from __future__ import annotations

import asyncio
from typing import Any

from ..models_courses import CourseForm, CoursesResponse, CourseStatistics
from ..navigation import Route
from ..permissions import Action
from ..refetch import FilteredListing, Sleep
from ..session import ApiSession
from .base import BaseView

COURSE_FILTERS: dict[str, Any] = {
    "search": None,
    "status": None,
    "branchId": None,
    "page": 1,
    "limit": 10,
}


class CoursesView(BaseView):
    module = "courses"
    route = Route.COURSES

    def __init__(self, api: ApiSession, sleep: Sleep = asyncio.sleep) -> None:
        super().__init__(api)
        self.listing: FilteredListing[CoursesResponse] = FilteredListing(
            self._fetch,
            initial_filters=COURSE_FILTERS,
            debounce_ms=api.config.debounce_ms,
            notifications=self.notifications,
            title="Unable to load courses",
            sleep=sleep,
        )
        self.statistics: CourseStatistics | None = None

    async def _fetch(self, filters: dict[str, Any]) -> CoursesResponse:
        return await self.api.courses_client().list_courses(filters)

    @property
    def can_manage(self) -> bool:
        return self.can(Action.MANAGE_COURSES)

    async def load(self) -> None:
        await asyncio.gather(self.listing.refresh(), self.load_statistics())

    async def load_statistics(self) -> None:
        stats = await self._guarded(
            "Unable to load statistics",
            self.api.courses_client().statistics(self.listing.filters.get("branchId")),
        )
        if stats is not None:
            self.statistics = stats

    async def create(self, form: CourseForm) -> bool:
        if not self._require(Action.MANAGE_COURSES):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to save course", self.api.courses_client().create_course(form))
        return await self._finish("course.create", ok)

    async def update(self, course_id: str, changes: dict[str, Any]) -> bool:
        if not self._require(Action.MANAGE_COURSES):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to save course", self.api.courses_client().update_course(course_id, changes))
        return await self._finish("course.update", ok)

    async def delete(self, course_id: str) -> bool:
        if not self._require(Action.MANAGE_COURSES):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to delete course", self.api.courses_client().delete_course(course_id))
        return await self._finish("course.delete", ok)

    async def restore(self, course_id: str) -> bool:
        if not self._require(Action.MANAGE_COURSES):
            return False
        self.error = None
        ok, _ = await self._attempt("Unable to restore course", self.api.courses_client().restore_course(course_id))
        return await self._finish("course.restore", ok)

    async def _finish(self, action: str, ok: bool) -> bool:
        if not ok:
            self._log(action, "error")
            return False
        self._log(action, "ok")
        await self.load()
        return True
