"""Role-scoped aggregate views and the dispatcher that builds them."""

from .aggregator import RoleAggregator
from .views import (
    AgentView,
    TeamMemberSummary,
    ManagerView,
    TeamSummary,
    DepartmentSummary,
    LeadershipView,
    AdminView,
    RoleView,
    view_to_dict
)

__all__ = [
    "RoleAggregator",
    "AgentView",
    "TeamMemberSummary",
    "ManagerView",
    "TeamSummary",
    "DepartmentSummary",
    "LeadershipView",
    "AdminView",
    "RoleView",
    "view_to_dict"
]
