"""
Role Aggregator

Builds the view appropriate to a caller's role by composing the score
calculator and leaderboard ranker over the population the data source
supplies:

- agent: one user's scores, their position on the organisation leaderboard
  and their recent trend
- manager: a team's members, health score, internal leaderboard and
  attention flags
- leadership: per-team health, per-department scores, organisation
  health and leaderboard
- admin: operational counts and configuration, without scoring

Every call is independent. Scores computed while building a view are
shared only within that call.
"""

import logging
import statistics
from datetime import date, datetime, timezone
from typing import Iterable, Optional, Union

from ..config.settings import Settings, get_settings
from ..core.entities import KPIScoreResult, LeaderboardEntry, Role, StatusTier
from ..core.errors import InvalidRoleError, UnknownUserError, ValidationError
from ..data.source import DataSource
from ..metrics.attention import AttentionEngine
from ..metrics.calculator import ScoreCalculator, round_half_up
from ..metrics.leaderboard import LeaderboardRanker, entry_for
from ..metrics.trends import daily_scores, trend_direction
from .views import (
    AdminView,
    AgentView,
    DepartmentSummary,
    LeadershipView,
    ManagerView,
    RoleView,
    TeamMemberSummary,
    TeamSummary
)

logger = logging.getLogger(__name__)


class RoleAggregator:
    """
    Assembles role views from a data source.

    Lookup failures from the data source propagate unchanged.
    """

    def __init__(
        self,
        data_source: DataSource,
        calculator: Optional[ScoreCalculator] = None,
        ranker: Optional[LeaderboardRanker] = None,
        attention: Optional[AttentionEngine] = None,
        settings: Optional[Settings] = None
    ):
        self._settings = settings or get_settings()
        self._data = data_source
        self._calculator = calculator or ScoreCalculator(settings=self._settings)
        self._ranker = ranker or LeaderboardRanker()
        self._attention = attention or AttentionEngine()

    # ------------------------------------------------------------------
    # Scoring entry points
    # ------------------------------------------------------------------

    def calculate_kpi_scores(self, user_id: str) -> KPIScoreResult:
        """Score one user from the observations the data source holds."""
        self._calculator.validate_user_id(user_id)
        observations = self._data.get_observations(user_id)
        return self._calculator.calculate_kpi_scores(user_id, observations)

    def calculate_leaderboard(
        self,
        scope: Optional[str] = None,
        require_non_empty: bool = False
    ) -> tuple[LeaderboardEntry, ...]:
        """Rank a population: the organisation, or one team when scope is a team id."""
        population = self._data.get_population(scope)
        results = self._score_users(population, {})
        return self._rank(results, require_non_empty, scope)

    def _score_users(
        self,
        user_ids: Iterable[str],
        scored: dict[str, KPIScoreResult]
    ) -> list[KPIScoreResult]:
        """Score users in order, reusing results already computed in this call."""
        results = []
        for user_id in user_ids:
            if user_id not in scored:
                scored[user_id] = self.calculate_kpi_scores(user_id)
            results.append(scored[user_id])
        return results

    def _rank(
        self,
        results: Iterable[KPIScoreResult],
        require_non_empty: bool = False,
        scope: Optional[str] = None
    ) -> tuple[LeaderboardEntry, ...]:
        scores = {r.user_id: r.overall_score for r in results}
        return self._ranker.rank(scores, require_non_empty=require_non_empty, scope=scope)

    def _team_health(self, results: list[KPIScoreResult]) -> tuple[int, StatusTier]:
        if not results:
            return 0, StatusTier.NO_DATA
        health = int(round_half_up(statistics.mean(r.overall_score for r in results)))
        return health, self._calculator.classify(health)

    def _department_breakdowns(
        self,
        results: list[KPIScoreResult]
    ) -> tuple[DepartmentSummary, ...]:
        """Group scored users by department, in order of first appearance."""
        by_department: dict[str, list[KPIScoreResult]] = {}
        for result in results:
            department = self._data.get_user(result.user_id).department
            by_department.setdefault(department, []).append(result)

        summaries = []
        for department, members in by_department.items():
            average = round_half_up(statistics.mean(r.overall_score for r in members), 2)
            summaries.append(DepartmentSummary(
                department=department,
                member_count=len(members),
                average_score=average,
                status=self._calculator.classify(average),
                metric_aggregates=self._calculator.aggregate_metric_scores(members)
            ))
        return tuple(summaries)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def agent_view(self, user_id: str, as_of: Optional[date] = None) -> AgentView:
        """Individual dashboard for one agent."""
        self._calculator.validate_user_id(user_id)
        profile = self._data.get_user(user_id)

        population = self._data.get_population(None)
        if user_id not in population:
            raise UnknownUserError(user_id, scope="org")

        scored: dict[str, KPIScoreResult] = {}
        results = self._score_users(population, scored)
        leaderboard = self._rank(results, require_non_empty=True, scope="org")

        as_of = as_of or datetime.now(timezone.utc).date()
        points = daily_scores(
            self._calculator,
            user_id,
            self._data.get_observations(user_id),
            end_date=as_of,
            days=self._settings.trend_days
        )

        logger.debug("Built agent view for %s over %d users", user_id, len(population))
        return AgentView(
            user_id=user_id,
            name=profile.name,
            team_id=profile.team_id,
            kpi_scores=scored[user_id],
            leaderboard_entry=entry_for(leaderboard, user_id, scope="org"),
            population_size=len(population),
            trend=trend_direction(user_id, points)
        )

    def manager_view(self, team_id: str) -> ManagerView:
        """Team overview for the manager of ``team_id``."""
        roster = self._data.get_team_roster(team_id)
        results = self._score_users(roster, {})
        health, status = self._team_health(results)

        members = tuple(
            TeamMemberSummary(
                user_id=result.user_id,
                name=self._data.get_user(result.user_id).name,
                kpi_scores=result,
                attention_status=self._attention.attention_status(result)
            )
            for result in results
        )

        logger.debug("Built manager view for %s (%d members)", team_id, len(roster))
        return ManagerView(
            team_id=team_id,
            team_health_score=health,
            team_status=status,
            members=members,
            leaderboard=self._rank(results, scope=team_id),
            metric_aggregates=self._calculator.aggregate_metric_scores(results),
            attention_flags=self._attention.evaluate_all(results)
        )

    def leadership_view(self) -> LeadershipView:
        """
        Organisation overview.

        Org health averages team health scores over every team (teams
        weighted equally), not individual scores. A team without members
        contributes its health of 0.
        """
        scored: dict[str, KPIScoreResult] = {}
        teams = []

        for team_id in self._data.get_all_teams():
            roster = self._data.get_team_roster(team_id)
            health, status = self._team_health(self._score_users(roster, scored))
            teams.append(TeamSummary(
                team_id=team_id,
                member_count=len(roster),
                team_health_score=health,
                status=status
            ))

        if teams:
            org_health = round_half_up(statistics.mean(t.team_health_score for t in teams), 2)
            org_status = self._calculator.classify(org_health)
        else:
            org_health = 0.0
            org_status = StatusTier.NO_DATA

        results = self._score_users(self._data.get_population(None), scored)

        logger.debug("Built leadership view over %d teams", len(teams))
        return LeadershipView(
            org_health_score=org_health,
            org_status=org_status,
            teams=tuple(teams),
            department_breakdowns=self._department_breakdowns(results),
            leaderboard=self._rank(results, scope="org"),
            metric_aggregates=self._calculator.aggregate_metric_scores(results)
        )

    def admin_view(self) -> AdminView:
        """System overview. Does not score anyone."""
        users = self._data.get_all_users()
        users_by_role = {role.value: 0 for role in Role}
        for user in users:
            users_by_role[user.role.value] += 1

        return AdminView(
            total_users=len(users),
            active_users=sum(1 for u in users if u.is_active),
            users_by_role=users_by_role,
            total_teams=len(self._data.get_all_teams()),
            total_observations=self._data.count_observations(),
            metric_definitions=self._calculator.catalog.all_definitions()
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def get_role_data(
        self,
        role: Union[Role, str],
        identifier: Optional[str] = None,
        as_of: Optional[date] = None
    ) -> RoleView:
        """
        Build the view for ``role``.

        agent needs a user id and manager a team id; leadership and admin
        ignore the identifier.
        """
        role = _coerce_role(role)

        if role == Role.AGENT:
            return self.agent_view(_require(identifier, role), as_of=as_of)
        elif role == Role.MANAGER:
            return self.manager_view(_require(identifier, role))
        elif role == Role.LEADERSHIP:
            return self.leadership_view()
        elif role == Role.ADMIN:
            return self.admin_view()
        raise InvalidRoleError(role)


def _coerce_role(role: Union[Role, str]) -> Role:
    if isinstance(role, Role):
        return role
    try:
        return Role(str(role).strip().lower())
    except ValueError:
        raise InvalidRoleError(role) from None


def _require(identifier: Optional[str], role: Role) -> str:
    if not identifier:
        raise ValidationError(
            f"An identifier is required for the {role.value} view",
            {"role": role.value}
        )
    return identifier
