"""
Metrics and Scoring

This module provides:
- The metric catalog (definitions, weights, targets)
- Score calculation and status classification
- Leaderboard ranking
- Performance trends
- Attention rules for team members
"""

from .catalog import MetricCatalog, DEFAULT_METRICS, build_catalog, get_catalog
from .calculator import ScoreCalculator, MetricAggregate, classify
from .leaderboard import LeaderboardRanker, entry_for
from .trends import TrendPoint, PerformanceTrend, daily_scores, trend_direction
from .attention import (
    AttentionAction,
    AttentionStatus,
    AttentionRule,
    AttentionFlag,
    AttentionEngine
)

__all__ = [
    "MetricCatalog",
    "DEFAULT_METRICS",
    "build_catalog",
    "get_catalog",
    "ScoreCalculator",
    "MetricAggregate",
    "classify",
    "LeaderboardRanker",
    "entry_for",
    "TrendPoint",
    "PerformanceTrend",
    "daily_scores",
    "trend_direction",
    "AttentionAction",
    "AttentionStatus",
    "AttentionRule",
    "AttentionFlag",
    "AttentionEngine"
]
