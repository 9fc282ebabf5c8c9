from .attendance import AttendanceView
from .branch_users import BranchUsersView
from .branches import BranchesView
from .courses import CoursesView
from .dashboard import DashboardView
from .finances import FinancesView
from .login import LoginView
from .reports import ReportsView
from .state import ViewState, ViewStatus, resolve_state
from .students import StudentsView
from .users import UsersView

__all__ = [
    "AttendanceView",
    "BranchUsersView",
    "BranchesView",
    "CoursesView",
    "DashboardView",
    "FinancesView",
    "LoginView",
    "ReportsView",
    "StudentsView",
    "UsersView",
    "ViewState",
    "ViewStatus",
    "resolve_state",
]
