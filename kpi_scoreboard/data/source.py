"""
Data Source Collaborator

The engine never loads data itself. A DataSource supplies users, team
rosters and metric observations already loaded from wherever they live.

Populations and rosters only contain active agents; managers, leadership
and admin accounts are directory entries but are not scored.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Union

import pydantic

from ..core.entities import Role, UserProfile
from ..core.errors import UnknownTeamError, UnknownUserError, ValidationError
from ..core.schemas import MetricObservation

logger = logging.getLogger(__name__)


class DataSource(ABC):
    """
    Abstract base class for the data-access collaborator.

    Lookups of unknown ids raise UnknownUserError / UnknownTeamError.
    """

    @abstractmethod
    def get_observations(self, user_id: str) -> tuple[MetricObservation, ...]:
        """All observations recorded for a user."""
        pass

    @abstractmethod
    def get_team_roster(self, team_id: str) -> tuple[str, ...]:
        """User ids of the scored members of a team."""
        pass

    @abstractmethod
    def get_all_teams(self) -> tuple[str, ...]:
        """All team ids."""
        pass

    @abstractmethod
    def get_population(self, scope: Optional[str] = None) -> tuple[str, ...]:
        """User ids to rank. ``None`` is the whole organisation, else a team id."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> UserProfile:
        """Directory record for a user."""
        pass

    @abstractmethod
    def get_all_users(self) -> tuple[UserProfile, ...]:
        """Every directory record, scored or not."""
        pass

    def count_observations(self) -> int:
        """Total observations across all users."""
        return sum(len(self.get_observations(u.user_id)) for u in self.get_all_users())


def parse_observation(raw: Union[MetricObservation, dict[str, Any]]) -> MetricObservation:
    """Validate a raw observation record."""
    if isinstance(raw, MetricObservation):
        return raw
    try:
        return MetricObservation.model_validate(raw)
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid metric observation",
            {"record": raw, "errors": e.errors(include_url=False)}
        ) from e


class InMemoryDataSource(DataSource):
    """
    DataSource over in-memory collections.

    Users and observations keep their insertion order, which is the
    submission order used for leaderboard tie-breaks.
    """

    def __init__(
        self,
        users: Iterable[UserProfile],
        observations: Iterable[Union[MetricObservation, dict]] = (),
        teams: Optional[Iterable[str]] = None
    ):
        self._users: dict[str, UserProfile] = {}
        for user in users:
            self._users[user.user_id] = user

        self._observations: dict[str, list[MetricObservation]] = {
            user_id: [] for user_id in self._users
        }
        for raw in observations:
            observation = parse_observation(raw)
            if observation.user_id not in self._observations:
                logger.warning(
                    "Dropping observation for unknown user %s", observation.user_id
                )
                continue
            self._observations[observation.user_id].append(observation)

        team_ids = list(teams or [])
        for user in self._users.values():
            if user.team_id and user.team_id not in team_ids:
                team_ids.append(user.team_id)
        self._teams = tuple(team_ids)

    def _scored(self, user: UserProfile) -> bool:
        return user.role == Role.AGENT and user.is_active

    def get_observations(self, user_id: str) -> tuple[MetricObservation, ...]:
        if user_id not in self._observations:
            raise UnknownUserError(user_id)
        return tuple(self._observations[user_id])

    def get_team_roster(self, team_id: str) -> tuple[str, ...]:
        if team_id not in self._teams:
            raise UnknownTeamError(team_id)
        return tuple(
            u.user_id for u in self._users.values()
            if u.team_id == team_id and self._scored(u)
        )

    def get_all_teams(self) -> tuple[str, ...]:
        return self._teams

    def get_population(self, scope: Optional[str] = None) -> tuple[str, ...]:
        if scope is not None:
            return self.get_team_roster(scope)
        return tuple(u.user_id for u in self._users.values() if self._scored(u))

    def get_user(self, user_id: str) -> UserProfile:
        try:
            return self._users[user_id]
        except KeyError:
            raise UnknownUserError(user_id) from None

    def get_all_users(self) -> tuple[UserProfile, ...]:
        return tuple(self._users.values())

    def count_observations(self) -> int:
        return sum(len(obs) for obs in self._observations.values())
