from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class Route(str, Enum):
    LOGIN = "/"
    DASHBOARD = "/dashboard"
    PROFILES = "/profiles"
    COURSES = "/courses"
    ATTENDANCE = "/attendance"
    FINANCES = "/finances"
    BRANCHES = "/branches"
    BRANCH_USERS = "/branch-users"
    USERS = "/users"
    REPORTS = "/reports"


@dataclass
class Navigator:
    route: Route = Route.LOGIN
    history: list[Route] = field(default_factory=list)

    def navigate(self, route: Route) -> None:
        if route == self.route:
            return
        logger.info("navigate", extra={"from_route": self.route.value, "to_route": route.value})
        self.history.append(self.route)
        self.route = route

    def to_login(self) -> None:
        self.navigate(Route.LOGIN)
