"""Core entities, input schemas and errors for the scoring engine."""

from .entities import (
    StatusTier,
    MetricDirection,
    Role,
    UserStatus,
    MetricScore,
    KPIScoreResult,
    LeaderboardEntry,
    UserProfile
)
from .schemas import MetricDefinition, MetricObservation
from .errors import (
    KPIError,
    ValidationError,
    InvalidUserError,
    InvalidRoleError,
    UnknownMetricError,
    LookupFailure,
    UnknownUserError,
    UserNotFoundError,
    UnknownTeamError,
    ConfigurationError,
    EmptyPopulationError
)

__all__ = [
    "StatusTier",
    "MetricDirection",
    "Role",
    "UserStatus",
    "MetricScore",
    "KPIScoreResult",
    "LeaderboardEntry",
    "UserProfile",
    "MetricDefinition",
    "MetricObservation",
    "KPIError",
    "ValidationError",
    "InvalidUserError",
    "InvalidRoleError",
    "UnknownMetricError",
    "LookupFailure",
    "UnknownUserError",
    "UserNotFoundError",
    "UnknownTeamError",
    "ConfigurationError",
    "EmptyPopulationError"
]
