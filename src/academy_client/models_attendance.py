from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, Field

from .models import BranchRef, MirrorModel, PersonRef


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    EXCUSED = "Excused"

    @property
    def records_time(self) -> bool:
        return self in {AttendanceStatus.PRESENT, AttendanceStatus.LATE}


class AttendanceStudentRef(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    student_id: str | None = None
    full_name: str | None = None
    email: str | None = None


class CourseRef(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str = ""


class AttendanceRecord(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    student: Optional[AttendanceStudentRef] = None
    course: Optional[CourseRef] = None
    branch: Optional[BranchRef] = None
    date: str
    status: AttendanceStatus
    time_in: str | None = None
    notes: str | None = None
    marked_by: Optional[PersonRef] = None
    last_modified_by: Optional[PersonRef] = None


class AttendanceMark(MirrorModel):
    status: AttendanceStatus
    time_in: str | None = None
    notes: str | None = None


class StudentWithAttendance(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    student_id: str | None = None
    full_name: str
    email: str | None = None
    course: Optional[CourseRef] = None
    branch: Optional[BranchRef] = None
    attendance: Optional[AttendanceMark] = None


class AttendancePagination(MirrorModel):
    current_page: int = 1
    total_pages: int = 1
    total_records: int = 0
    has_next: bool = False
    has_prev: bool = False


class AttendanceRecordsResponse(MirrorModel):
    attendance_records: List[AttendanceRecord] = Field(default_factory=list)
    pagination: Optional[AttendancePagination] = None


class CourseStudentsResponse(MirrorModel):
    course: Optional[CourseRef] = None
    students: List[StudentWithAttendance] = Field(default_factory=list)
    total_students: int = 0


class AttendanceStats(MirrorModel):
    present: int = Field(default=0, alias="Present")
    absent: int = Field(default=0, alias="Absent")
    late: int = Field(default=0, alias="Late")
    excused: int = Field(default=0, alias="Excused")
    total: int = 0
    total_enrolled: int = 0
    not_marked: int = 0


class AttendanceStatsResponse(MirrorModel):
    course: Optional[CourseRef] = None
    date: str | None = None
    stats: AttendanceStats = Field(default_factory=AttendanceStats)


class AttendanceEntry(MirrorModel):
    """One row of a mark or bulk-mark request."""

    student: str
    course: str
    date: str
    status: AttendanceStatus
    time_in: str | None = None
    notes: str | None = None
