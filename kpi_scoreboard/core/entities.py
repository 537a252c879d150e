"""
Core Scoreboard Entities

This module defines the value objects the scoring engine produces and the
enumerations shared by every layer. All derived entities are created fresh
for each call and are never mutated afterwards.

Entities:
- StatusTier: Discrete classification of a score
- MetricScore: One metric's normalized score for one user
- KPIScoreResult: A user's weighted overall score and per-metric breakdown
- LeaderboardEntry: A user's position in a ranked population
- UserProfile: Directory record for a user (team, role, activity status)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StatusTier(str, Enum):
    """
    Status tiers for a score.

    NO_DATA is not a numeric tier; it marks a metric (or a user) for which
    no observation was available.
    """
    EXCELLENT = "excellent"
    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    CRITICAL = "critical"
    NO_DATA = "no-data"


class MetricDirection(str, Enum):
    """Which way a raw metric value improves."""
    HIGHER_IS_BETTER = "higher-is-better"
    LOWER_IS_BETTER = "lower-is-better"


class Role(str, Enum):
    """Caller roles, each mapped to one aggregate view."""
    AGENT = "agent"
    MANAGER = "manager"
    LEADERSHIP = "leadership"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """Directory status of a user account."""
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class MetricScore:
    """A single metric's normalized score (0-100) and status."""
    metric_key: str
    normalized_score: float
    status: StatusTier
    raw_value: Optional[float] = None  # None when no observation existed
    weight: float = 0.0

    @property
    def has_data(self) -> bool:
        return self.status != StatusTier.NO_DATA


@dataclass(frozen=True)
class KPIScoreResult:
    """
    Weighted overall score for one user.

    metric_scores follow the catalog's registration order so that output
    ordering is deterministic.
    """
    user_id: str
    overall_score: int
    metric_scores: tuple[MetricScore, ...]
    status: StatusTier

    def score_for(self, metric_key: str) -> Optional[MetricScore]:
        """Get the score entry for a metric, if registered."""
        for score in self.metric_scores:
            if score.metric_key == metric_key:
                return score
        return None

    @property
    def has_data(self) -> bool:
        return any(score.has_data for score in self.metric_scores)


@dataclass(frozen=True)
class LeaderboardEntry:
    """A user's position on a leaderboard."""
    user_id: str
    rank: int
    score: float
    gap_to_next: float = 0.0


@dataclass(frozen=True)
class UserProfile:
    """
    Directory record for a user.

    Supplied by the data source; the engine only reads it to resolve
    populations and operational counts.
    """
    user_id: str
    name: str = ""
    role: Role = Role.AGENT
    team_id: Optional[str] = None
    department: str = ""
    status: UserStatus = UserStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
