from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field

from .models import BranchRef, MirrorModel, Pagination, PersonRef

StudentStatus = Literal["Active", "Inactive", "Suspended", "Graduated", "Dropped"]
StudentLevel = Literal["Beginner", "Intermediate", "Advanced"]


class StudentCourseRef(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    title: str = ""
    modules: List[str] = Field(default_factory=list)


class StudentDocument(MirrorModel):
    name: str
    url: str
    type: Literal["image", "pdf", "document"] = "document"
    uploaded_at: str | None = None


class OriginalCertificate(MirrorModel):
    has_document: bool = False
    title: str = ""


class PersonalDocuments(MirrorModel):
    birth_certificate: bool = False
    grama_niladhari_certificate: bool = False
    guardian_spouse_letter: bool = False
    original_certificate: OriginalCertificate = Field(default_factory=OriginalCertificate)


class Student(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    student_id: str | None = None
    full_name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    date_of_birth: str | None = None
    course: Optional[StudentCourseRef] = None
    modules: List[str] = Field(default_factory=list)
    branch: Optional[BranchRef] = None
    status: str | None = None
    enrollment_date: str | None = None
    level: str | None = None
    certifications: List[str] = Field(default_factory=list)
    documents: List[StudentDocument] = Field(default_factory=list)
    personal_documents: Optional[PersonalDocuments] = None
    created_by: Optional[PersonRef] = None
    is_active: bool | None = None


class StudentsResponse(MirrorModel):
    students: List[Student] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class StudentStatistics(MirrorModel):
    total_students: int = 0
    active_students: int = 0
    graduated_students: int = 0
    average_gpa: float | None = Field(default=None, alias="averageGPA")


class StudentForm(MirrorModel):
    """Payload for create/update; built from loosely typed form input."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    date_of_birth: str = ""
    course: str = ""
    modules: List[str] = Field(default_factory=list)
    branch: str | None = None
    status: StudentStatus = "Active"
    enrollment_date: str = ""
    level: StudentLevel = "Beginner"
    certifications: List[str] = Field(default_factory=list)
    child_baby_care: bool = False
    elder_care: bool = False
    documents: List[StudentDocument] = Field(default_factory=list)
    personal_documents: PersonalDocuments = Field(default_factory=PersonalDocuments)
    hostel_requirement: bool = False
    meal_requirement: bool = False

    @classmethod
    def from_input(cls, data: dict, today: date | None = None) -> "StudentForm":
        def _split(value: object) -> list[str]:
            if isinstance(value, list):
                return [str(item) for item in value]
            if isinstance(value, str):
                return [part.strip() for part in value.split(",") if part.strip()]
            return []

        return cls(
            full_name=str(data.get("fullName") or "").strip(),
            email=str(data.get("email") or "").strip().lower(),
            phone=str(data.get("phone") or "").strip(),
            address=str(data.get("address") or "").strip(),
            date_of_birth=str(data.get("dateOfBirth") or ""),
            course=str(data.get("course") or ""),
            modules=_split(data.get("modules")),
            branch=data.get("branch") or None,
            status=data.get("status") or "Active",
            enrollment_date=str(data.get("enrollmentDate") or (today or date.today()).isoformat()),
            level=data.get("level") or "Beginner",
            certifications=_split(data.get("certifications")),
            child_baby_care=bool(data.get("childBabyCare")),
            elder_care=bool(data.get("elderCare")),
            documents=data.get("documents") or [],
            personal_documents=data.get("personalDocuments") or PersonalDocuments(),
            hostel_requirement=bool(data.get("hostelRequirement")),
            meal_requirement=bool(data.get("mealRequirement")),
        )


class StudentMutationResponse(MirrorModel):
    message: str = ""
    student: Optional[Student] = None
