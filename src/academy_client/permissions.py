from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .models import Role, SessionData


class Action(str, Enum):
    MARK_ATTENDANCE = "attendance.mark"
    EDIT_ATTENDANCE = "attendance.edit"
    MANAGE_COURSES = "courses.manage"
    MANAGE_BRANCH_USERS = "branch_users.manage"
    MANAGE_BUDGETS = "budgets.manage"
    MANAGE_TRANSACTIONS = "transactions.manage"
    MANAGE_USERS = "users.manage"
    MANAGE_BRANCHES = "branches.manage"
    SELECT_BRANCH = "dashboard.select_branch"
    VIEW_BRANCH_STATS = "dashboard.branch_stats"


@dataclass(frozen=True)
class PermissionDecision:
    allowed: bool
    mode: str
    message: str = ""


_ROLE_RULES: dict[Action, frozenset[Role]] = {
    Action.MARK_ATTENDANCE: frozenset({Role.SUPER_ADMIN, Role.ADMIN, Role.MODERATOR}),
    Action.EDIT_ATTENDANCE: frozenset({Role.SUPER_ADMIN, Role.ADMIN}),
    Action.MANAGE_COURSES: frozenset({Role.SUPER_ADMIN}),
    Action.MANAGE_BRANCH_USERS: frozenset({Role.ADMIN}),
    Action.MANAGE_BUDGETS: frozenset({Role.SUPER_ADMIN}),
    Action.MANAGE_TRANSACTIONS: frozenset({Role.SUPER_ADMIN, Role.ADMIN}),
    Action.MANAGE_USERS: frozenset({Role.SUPER_ADMIN, Role.ADMIN}),
    Action.MANAGE_BRANCHES: frozenset({Role.SUPER_ADMIN}),
    Action.SELECT_BRANCH: frozenset({Role.SUPER_ADMIN}),
    Action.VIEW_BRANCH_STATS: frozenset({Role.SUPER_ADMIN}),
}

_DENIED_MESSAGES: dict[Action, str] = {
    Action.MARK_ATTENDANCE: "Your role cannot mark attendance.",
    Action.EDIT_ATTENDANCE: "Only administrators can edit attendance records.",
    Action.MANAGE_COURSES: "Only the super administrator can manage courses.",
    Action.MANAGE_BRANCH_USERS: "Only branch administrators can manage branch users.",
    Action.MANAGE_BUDGETS: "Only the super administrator can manage budgets.",
    Action.MANAGE_TRANSACTIONS: "Only administrators can manage transactions.",
    Action.MANAGE_USERS: "Only administrators can manage users.",
    Action.MANAGE_BRANCHES: "Only the super administrator can manage branches.",
    Action.SELECT_BRANCH: "Only the super administrator can switch branches.",
    Action.VIEW_BRANCH_STATS: "Only the super administrator can view branch statistics.",
}

_ASSIGNABLE_ROLES: dict[Role, tuple[Role, ...]] = {
    Role.SUPER_ADMIN: (Role.SUPER_ADMIN, Role.ADMIN, Role.MODERATOR, Role.STAFF),
    Role.ADMIN: (Role.MODERATOR, Role.STAFF),
    Role.MODERATOR: (),
    Role.STAFF: (),
}

_unmapped = set(Action) - set(_ROLE_RULES)
if _unmapped:
    raise RuntimeError(f"Actions without a role rule: {sorted(a.value for a in _unmapped)}")


def can_perform(role: Role | str | None, action: Action, target_role: Role | str | None = None) -> bool:
    parsed = Role.parse(role)
    if parsed is None:
        return False
    if parsed not in _ROLE_RULES[action]:
        return False
    if action is Action.MANAGE_BRANCH_USERS and target_role is not None:
        # branch admins manage moderators and staff, never other admins
        target = Role.parse(target_role)
        return target in {Role.MODERATOR, Role.STAFF}
    return True


def assignable_roles(role: Role | str | None) -> tuple[Role, ...]:
    parsed = Role.parse(role)
    if parsed is None:
        return ()
    return _ASSIGNABLE_ROLES[parsed]


def check_permission(
    session: SessionData | None,
    action: Action,
    target_role: Role | str | None = None,
) -> PermissionDecision:
    if session is None:
        return PermissionDecision(False, "disabled", "Sign in to continue.")
    if can_perform(session.user.role, action, target_role):
        return PermissionDecision(True, "enabled")
    return PermissionDecision(False, "hidden", _DENIED_MESSAGES[action])


__all__ = ["Action", "PermissionDecision", "assignable_roles", "can_perform", "check_permission"]
