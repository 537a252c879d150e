"""
KPI Scoreboard

Scoring and role-aggregation engine for a performance-gamification
dashboard: raw operational metrics become normalized scores, status tiers,
leaderboards and role-scoped views (agent, manager, leadership, admin).
"""

from .core import (
    StatusTier,
    Role,
    MetricDefinition,
    MetricObservation,
    KPIScoreResult,
    LeaderboardEntry,
    KPIError
)
from .metrics import MetricCatalog, ScoreCalculator, LeaderboardRanker, classify
from .roles import RoleAggregator

__version__ = "0.1.0"

__all__ = [
    "StatusTier",
    "Role",
    "MetricDefinition",
    "MetricObservation",
    "KPIScoreResult",
    "LeaderboardEntry",
    "KPIError",
    "MetricCatalog",
    "ScoreCalculator",
    "LeaderboardRanker",
    "classify",
    "RoleAggregator"
]
