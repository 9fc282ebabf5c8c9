from __future__ import annotations

import pytest

from academy_client.models import BranchRef, Role, SessionData, UserProfile
from academy_client.permissions import Action, assignable_roles, can_perform, check_permission

TABLE = {
    Action.MARK_ATTENDANCE: {Role.SUPER_ADMIN, Role.ADMIN, Role.MODERATOR},
    Action.EDIT_ATTENDANCE: {Role.SUPER_ADMIN, Role.ADMIN},
    Action.MANAGE_COURSES: {Role.SUPER_ADMIN},
    Action.MANAGE_BRANCH_USERS: {Role.ADMIN},
    Action.MANAGE_BUDGETS: {Role.SUPER_ADMIN},
    Action.MANAGE_TRANSACTIONS: {Role.SUPER_ADMIN, Role.ADMIN},
    Action.MANAGE_USERS: {Role.SUPER_ADMIN, Role.ADMIN},
    Action.MANAGE_BRANCHES: {Role.SUPER_ADMIN},
}


def make_user(role: Role) -> UserProfile:
    return UserProfile(id="u-1", username="tester", role=role, branch=BranchRef(id="b-1", name="Harare Central"))


@pytest.mark.parametrize("action", list(TABLE))
@pytest.mark.parametrize("role", list(Role))
def test_role_table(role: Role, action: Action) -> None:
    assert can_perform(role, action) is (role in TABLE[action])


@pytest.mark.parametrize("role", ["moderator", "staff", "", None, "instructor", "SUPERADMIN"])
def test_only_privileged_roles_manage_courses(role) -> None:
    assert can_perform(role, Action.MANAGE_COURSES) is False


@pytest.mark.parametrize("action", list(Action))
def test_unknown_roles_are_denied_everything(action: Action) -> None:
    assert can_perform("guest", action) is False
    assert can_perform(None, action) is False


def test_branch_admin_manages_only_non_admin_targets() -> None:
    assert can_perform(Role.ADMIN, Action.MANAGE_BRANCH_USERS, target_role=Role.STAFF) is True
    assert can_perform(Role.ADMIN, Action.MANAGE_BRANCH_USERS, target_role="moderator") is True
    assert can_perform(Role.ADMIN, Action.MANAGE_BRANCH_USERS, target_role=Role.ADMIN) is False
    assert can_perform(Role.ADMIN, Action.MANAGE_BRANCH_USERS, target_role=Role.SUPER_ADMIN) is False
    assert can_perform(Role.SUPER_ADMIN, Action.MANAGE_BRANCH_USERS, target_role=Role.STAFF) is False


def test_dashboard_branch_controls_are_super_admin_only() -> None:
    assert can_perform(Role.SUPER_ADMIN, Action.SELECT_BRANCH) is True
    assert can_perform(Role.ADMIN, Action.SELECT_BRANCH) is False
    assert can_perform(Role.SUPER_ADMIN, Action.VIEW_BRANCH_STATS) is True
    assert can_perform(Role.MODERATOR, Action.VIEW_BRANCH_STATS) is False


def test_assignable_roles() -> None:
    assert assignable_roles(Role.SUPER_ADMIN) == (Role.SUPER_ADMIN, Role.ADMIN, Role.MODERATOR, Role.STAFF)
    assert assignable_roles("admin") == (Role.MODERATOR, Role.STAFF)
    assert assignable_roles(Role.STAFF) == ()
    assert assignable_roles("unknown") == ()


def test_check_permission_decisions() -> None:
    staff = SessionData(token="t", user=make_user(Role.STAFF))
    admin = SessionData(token="t", user=make_user(Role.ADMIN))

    denied = check_permission(staff, Action.MARK_ATTENDANCE)
    assert denied.allowed is False
    assert denied.mode == "hidden"
    assert denied.message

    assert check_permission(admin, Action.MANAGE_TRANSACTIONS).allowed is True
    assert check_permission(None, Action.MANAGE_TRANSACTIONS).mode == "disabled"
