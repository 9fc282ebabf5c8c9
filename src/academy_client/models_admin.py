from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, Field

from .models import BranchRef, MirrorModel, Pagination, PersonRef, Role


class Branch(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    manager: Optional[PersonRef] = None
    is_active: bool | None = None


class BranchForm(MirrorModel):
    name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class BranchesResponse(MirrorModel):
    branches: List[Branch] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class User(MirrorModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    full_name: str | None = None
    username: str
    email: str | None = None
    role: str
    branch: Optional[BranchRef] = None
    is_active: bool | None = None

    @property
    def parsed_role(self) -> Role | None:
        return Role.parse(self.role)


class UsersResponse(MirrorModel):
    users: List[User] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class UserForm(MirrorModel):
    full_name: str
    username: str
    email: str | None = None
    password: str | None = None
    role: Role
    branch: str | None = None
    is_active: bool | None = None


class UserMutationResponse(MirrorModel):
    message: str = ""
    user: Optional[User] = None
