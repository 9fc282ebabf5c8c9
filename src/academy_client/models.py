from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MirrorModel(BaseModel):
    """Record mirrored verbatim from the API; unknown fields are kept."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )


class Role(str, Enum):
    SUPER_ADMIN = "superAdmin"
    ADMIN = "admin"
    MODERATOR = "moderator"
    STAFF = "staff"

    @classmethod
    def parse(cls, value: "Role | str | None") -> "Role | None":
        if isinstance(value, cls):
            return value
        if not value:
            return None
        try:
            return cls(str(value))
        except ValueError:
            return None


class BranchRef(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""


class PersonRef(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    full_name: str | None = None
    username: str | None = None


class UserProfile(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    full_name: str | None = None
    username: str
    role: Role
    branch: Optional[BranchRef] = None


class SessionData(BaseModel):
    token: str
    user: UserProfile


class BranchOption(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str


class LoginResponse(MirrorModel):
    token: str
    user: UserProfile
    message: str | None = None


class Pagination(MirrorModel):
    """Pagination block; the API uses two spellings depending on the resource."""

    current: int | None = None
    pages: int | None = None
    total: int | None = None
    limit: int | None = None
    current_page: int | None = None
    total_pages: int | None = None
    total_records: int | None = None
    has_next: bool | None = None
    has_prev: bool | None = None
    has_next_page: bool | None = None
    has_prev_page: bool | None = None


class MessageResponse(MirrorModel):
    message: str = ""
