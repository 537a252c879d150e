"""
Role Views

The aggregate structure returned for each caller role. Views are plain
value objects assembled per request; ``restricted`` names the sections a
role is not allowed to see.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional, Union

from ..core.entities import KPIScoreResult, LeaderboardEntry, Role, StatusTier
from ..core.schemas import MetricDefinition
from ..metrics.attention import AttentionFlag, AttentionStatus
from ..metrics.calculator import MetricAggregate
from ..metrics.trends import PerformanceTrend


AGENT_RESTRICTED = ("team-aggregates", "org-insights", "admin-configs")
MANAGER_RESTRICTED = ("org-level-data", "admin-configs")
LEADERSHIP_RESTRICTED = ("individual-details", "admin-configs")


@dataclass(frozen=True)
class AgentView:
    """Individual dashboard: own scores, own leaderboard position, trend."""
    user_id: str
    name: str
    team_id: Optional[str]
    kpi_scores: KPIScoreResult
    leaderboard_entry: LeaderboardEntry
    population_size: int
    trend: PerformanceTrend
    role: Role = Role.AGENT
    restricted: tuple[str, ...] = AGENT_RESTRICTED


@dataclass(frozen=True)
class TeamMemberSummary:
    """One member's row on the manager dashboard."""
    user_id: str
    name: str
    kpi_scores: KPIScoreResult
    attention_status: AttentionStatus


@dataclass(frozen=True)
class ManagerView:
    """Team overview: health, members, team leaderboard, attention flags."""
    team_id: str
    team_health_score: int
    team_status: StatusTier
    members: tuple[TeamMemberSummary, ...] = field(default_factory=tuple)
    leaderboard: tuple[LeaderboardEntry, ...] = field(default_factory=tuple)
    metric_aggregates: tuple[MetricAggregate, ...] = field(default_factory=tuple)
    attention_flags: tuple[AttentionFlag, ...] = field(default_factory=tuple)
    role: Role = Role.MANAGER
    restricted: tuple[str, ...] = MANAGER_RESTRICTED


@dataclass(frozen=True)
class TeamSummary:
    """A team's health as seen from the organisation level."""
    team_id: str
    member_count: int
    team_health_score: int
    status: StatusTier


@dataclass(frozen=True)
class DepartmentSummary:
    """Scores of the ranked population grouped by department."""
    department: str
    member_count: int
    average_score: float
    status: StatusTier
    metric_aggregates: tuple[MetricAggregate, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LeadershipView:
    """
    Organisation overview.

    org_health_score is the mean of team health scores, so every team
    counts equally regardless of its size. An empty team counts as 0.
    """
    org_health_score: float
    org_status: StatusTier
    teams: tuple[TeamSummary, ...] = field(default_factory=tuple)
    department_breakdowns: tuple[DepartmentSummary, ...] = field(default_factory=tuple)
    leaderboard: tuple[LeaderboardEntry, ...] = field(default_factory=tuple)
    metric_aggregates: tuple[MetricAggregate, ...] = field(default_factory=tuple)
    role: Role = Role.LEADERSHIP
    restricted: tuple[str, ...] = LEADERSHIP_RESTRICTED


@dataclass(frozen=True)
class AdminView:
    """System overview: operational counts and configuration, no scores."""
    total_users: int
    active_users: int
    users_by_role: dict = field(default_factory=dict)
    total_teams: int = 0
    total_observations: int = 0
    metric_definitions: tuple[MetricDefinition, ...] = field(default_factory=tuple)
    role: Role = Role.ADMIN
    restricted: tuple[str, ...] = ()


RoleView = Union[AgentView, ManagerView, LeadershipView, AdminView]


def view_to_dict(view: RoleView) -> dict:
    """Plain-dict form of a view for serialization by the HTTP layer."""
    data = asdict(view)
    if isinstance(view, AdminView):
        data["metric_definitions"] = [
            d.model_dump(mode="json") for d in view.metric_definitions
        ]
    return data
