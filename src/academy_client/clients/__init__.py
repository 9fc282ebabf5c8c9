from .attendance import AttendanceClient
from .auth import AuthClient
from .base import BaseClient
from .branches import BranchesClient
from .courses import CoursesClient
from .dashboard import DashboardClient
from .finance import FinanceClient
from .reports import ReportsClient
from .students import StudentsClient
from .upload import UploadClient
from .users import UsersClient

__all__ = [
    "AttendanceClient",
    "AuthClient",
    "BaseClient",
    "BranchesClient",
    "CoursesClient",
    "DashboardClient",
    "FinanceClient",
    "ReportsClient",
    "StudentsClient",
    "UploadClient",
    "UsersClient",
]
