from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import AliasChoices, Field

from .models import BranchRef, MirrorModel, Pagination, PersonRef

CourseStatus = Literal["Draft", "Active", "Inactive", "Completed"]


class Course(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str
    description: str | None = None
    duration: str | None = None
    price: float = 0
    currency: str | None = None
    max_students: int | None = None
    current_enrolled: int = 0
    schedule: str | None = None
    instructor: str | None = None
    next_start: str | None = None
    status: str | None = None
    modules: List[str] = Field(default_factory=list)
    branch: Optional[BranchRef] = None
    created_by: Optional[PersonRef] = None
    is_active: bool | None = None
    enrollment_percentage: float | None = None
    revenue: float | None = None


class CoursesResponse(MirrorModel):
    courses: List[Course] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class CourseStatistics(MirrorModel):
    total_courses: int = 0
    active_courses: int = 0
    total_enrolled: int = 0
    total_revenue: float = 0
    average_price: float = 0
    total_capacity: int = 0


class CourseForm(MirrorModel):
    title: str
    description: str
    duration: str
    price: float
    max_students: int
    schedule: str
    instructor: str
    next_start: str
    branch: str
    status: CourseStatus | None = None
    modules: List[str] = Field(default_factory=list)


class CourseMutationResponse(MirrorModel):
    message: str = ""
    course: Optional[Course] = None
