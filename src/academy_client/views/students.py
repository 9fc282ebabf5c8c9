from __future__ import annotations

import asyncio
from typing import Any

from ..models_students import StudentForm, StudentsResponse, StudentStatistics
from ..navigation import Route
from ..refetch import FilteredListing, Sleep
from ..session import ApiSession
from .base import BaseView

STUDENT_FILTERS: dict[str, Any] = {
    "search": None,
    "status": None,
    "course": None,
    "branchId": None,
    "page": 1,
    "limit": 10,
}


class StudentsView(BaseView):
    module = "students"
    route = Route.PROFILES

    def __init__(self, api: ApiSession, sleep: Sleep = asyncio.sleep) -> None:
        super().__init__(api)
        self.listing: FilteredListing[StudentsResponse] = FilteredListing(
            self._fetch,
            initial_filters=STUDENT_FILTERS,
            debounce_ms=api.config.debounce_ms,
            notifications=self.notifications,
            title="Unable to load students",
            sleep=sleep,
        )
        self.statistics: StudentStatistics | None = None

    async def _fetch(self, filters: dict[str, Any]) -> StudentsResponse:
        return await self.api.students_client().list_students(filters)

    async def load(self) -> None:
        await asyncio.gather(self.listing.refresh(), self.load_statistics())

    async def load_statistics(self) -> None:
        stats = await self._guarded(
            "Unable to load statistics",
            self.api.students_client().statistics(self.listing.filters.get("branchId")),
        )
        if stats is not None:
            self.statistics = stats

    async def save(self, data: dict[str, Any], student_id: str | None = None) -> bool:
        """Create or update from raw form input; on failure the form stays open."""
        client = self.api.students_client()
        self.error = None
        if student_id is None:
            ok, _ = await self._attempt("Unable to save student", client.create_student(StudentForm.from_input(data)))
        else:
            ok, _ = await self._attempt("Unable to save student", client.update_student(student_id, data))
        if not ok:
            return False
        self.notifications.success("Saved", "Student saved successfully")
        await self.load()
        return True

    async def delete(self, student_id: str) -> bool:
        self.error = None
        ok, _ = await self._attempt("Unable to delete student", self.api.students_client().delete_student(student_id))
        if not ok:
            return False
        await self.load()
        return True
