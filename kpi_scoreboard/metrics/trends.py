"""
Performance Trends

Daily overall scores for one user and the direction they are moving in.
Each day is scored only from observations recorded on that day, so days
without data score 0.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable

from ..core.schemas import MetricObservation
from .calculator import ScoreCalculator


@dataclass(frozen=True)
class TrendPoint:
    """Overall score for a single day."""
    day: date
    score: int


@dataclass(frozen=True)
class PerformanceTrend:
    """Trend data for a user's overall score over time."""
    user_id: str
    points: tuple[TrendPoint, ...] = field(default_factory=tuple)
    trend_direction: str = "stable"  # improving, declining, stable
    trend_strength: float = 0.0  # 0 to 1


def daily_scores(
    calculator: ScoreCalculator,
    user_id: str,
    observations: Iterable[MetricObservation],
    end_date: date,
    days: int = 7
) -> tuple[TrendPoint, ...]:
    """Score each of the ``days`` days ending at ``end_date``, oldest first."""
    observations = list(observations)
    points = []

    for offset in range(days - 1, -1, -1):
        day = end_date - timedelta(days=offset)
        result = calculator.calculate_kpi_scores(user_id, observations, on_date=day)
        points.append(TrendPoint(day=day, score=result.overall_score))

    return tuple(points)


def trend_direction(user_id: str, points: tuple[TrendPoint, ...]) -> PerformanceTrend:
    """Fit a least-squares line through the points and read its slope."""
    if len(points) < 2:
        return PerformanceTrend(user_id=user_id, points=points)

    n = len(points)
    x_mean = (n - 1) / 2
    y_mean = sum(p.score for p in points) / n

    numerator = sum((i - x_mean) * (p.score - y_mean) for i, p in enumerate(points))
    denominator = sum((i - x_mean) ** 2 for i in range(n))

    slope = numerator / denominator if denominator != 0 else 0

    # Normalize slope
    if y_mean != 0:
        normalized_slope = slope / y_mean
    else:
        normalized_slope = 0

    if normalized_slope > 0.05:
        direction = "improving"
    elif normalized_slope < -0.05:
        direction = "declining"
    else:
        direction = "stable"

    return PerformanceTrend(
        user_id=user_id,
        points=points,
        trend_direction=direction,
        trend_strength=min(1.0, abs(normalized_slope) * 10)
    )
