"""
Score Calculator

Turns a user's raw metric observations into:
- A normalized 0-100 score per registered metric
- A weighted overall score
- A status tier for each of the above

Missing-data policy: a registered metric without an observation scores 0
and still carries its full weight. Users are therefore penalized for gaps
rather than scored on a renormalized subset, which keeps overall scores
comparable across users.
"""

import logging
import math
import re
import statistics
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..config.settings import Settings, get_settings
from ..core.entities import KPIScoreResult, MetricScore, StatusTier
from ..core.errors import InvalidUserError
from ..core.schemas import MetricDefinition, MetricObservation
from .catalog import MetricCatalog, build_catalog, get_catalog

logger = logging.getLogger(__name__)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative scores (2.5 -> 3)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def classify(score: float, settings: Optional[Settings] = None) -> StatusTier:
    """Classify a numeric score. Lower bounds are inclusive."""
    settings = settings or get_settings()
    if score >= settings.threshold_excellent:
        return StatusTier.EXCELLENT
    elif score >= settings.threshold_on_track:
        return StatusTier.ON_TRACK
    elif score >= settings.threshold_at_risk:
        return StatusTier.AT_RISK
    return StatusTier.CRITICAL


@dataclass(frozen=True)
class MetricAggregate:
    """A metric averaged across several users."""
    metric_key: str
    average_value: Optional[float]
    average_score: float
    count: int
    status: StatusTier


class ScoreCalculator:
    """
    Calculates per-metric and overall KPI scores.

    Pure with respect to its inputs: the catalog and settings are read-only
    and no state is kept between calls.
    """

    def __init__(
        self,
        catalog: Optional[MetricCatalog] = None,
        settings: Optional[Settings] = None
    ):
        if catalog is None:
            catalog = build_catalog(settings) if settings else get_catalog()
        self._settings = settings or get_settings()
        self._catalog = catalog
        self._user_id_re = re.compile(self._settings.user_id_pattern)

    @property
    def catalog(self) -> MetricCatalog:
        return self._catalog

    def normalize_metric(
        self,
        observation: Optional[MetricObservation],
        definition: MetricDefinition
    ) -> float:
        """Map a raw value onto 0-100 relative to the metric's target."""
        if observation is None:
            return 0.0

        ratio = observation.raw_value / definition.target
        if definition.higher_is_better:
            return clamp(ratio * 100)
        # Meeting target scores 100; each target-width above it costs 100 points
        return clamp((2 - ratio) * 100)

    def classify(self, score: float) -> StatusTier:
        """Classify a numeric score with this calculator's thresholds."""
        return classify(score, self._settings)

    def validate_user_id(self, user_id: str) -> str:
        """Re-check identifier shape even though callers pre-validate."""
        if not isinstance(user_id, str) or not user_id.strip():
            raise InvalidUserError(user_id)
        if not self._user_id_re.match(user_id):
            raise InvalidUserError(user_id)
        return user_id

    def latest_observations(
        self,
        user_id: str,
        observations: Iterable[MetricObservation],
        on_date: Optional[date] = None
    ) -> dict[str, MetricObservation]:
        """
        Pick the most recent observation per registered metric.

        Observations for other users or unregistered metrics are ignored.
        With ``on_date`` only observations from that (UTC) day count.
        """
        latest: dict[str, MetricObservation] = {}

        for observation in observations:
            if observation.user_id != user_id:
                logger.debug(
                    "Ignoring observation for %s while scoring %s",
                    observation.user_id, user_id
                )
                continue
            if observation.metric_key not in self._catalog:
                logger.debug("Ignoring unregistered metric %s", observation.metric_key)
                continue
            if on_date and observation.timestamp.date() != on_date:
                continue

            current = latest.get(observation.metric_key)
            if current is None or observation.timestamp > current.timestamp:
                latest[observation.metric_key] = observation

        return latest

    def calculate_kpi_scores(
        self,
        user_id: str,
        observations: Iterable[MetricObservation],
        on_date: Optional[date] = None
    ) -> KPIScoreResult:
        """
        Calculate the weighted overall score for one user.

        Overall score = round(sum(normalized_score * weight)) over every
        registered metric, missing metrics contributing 0.
        """
        self.validate_user_id(user_id)
        latest = self.latest_observations(user_id, observations, on_date)

        metric_scores = []
        weighted_total = 0.0

        for definition in self._catalog:
            observation = latest.get(definition.key)

            if observation is None:
                metric_scores.append(MetricScore(
                    metric_key=definition.key,
                    normalized_score=0.0,
                    status=StatusTier.NO_DATA,
                    raw_value=None,
                    weight=definition.weight
                ))
                continue

            score = self.normalize_metric(observation, definition)
            weighted_total += score * definition.weight
            metric_scores.append(MetricScore(
                metric_key=definition.key,
                normalized_score=round_half_up(score, 2),
                status=self.classify(score),
                raw_value=observation.raw_value,
                weight=definition.weight
            ))

        if not latest:
            return KPIScoreResult(
                user_id=user_id,
                overall_score=0,
                metric_scores=tuple(metric_scores),
                status=StatusTier.NO_DATA
            )

        overall = int(clamp(round_half_up(weighted_total)))
        return KPIScoreResult(
            user_id=user_id,
            overall_score=overall,
            metric_scores=tuple(metric_scores),
            status=self.classify(overall)
        )

    def aggregate_metric_scores(
        self,
        results: Iterable[KPIScoreResult]
    ) -> tuple[MetricAggregate, ...]:
        """Average each metric over the users that reported it."""
        results = list(results)
        aggregates = []

        for definition in self._catalog:
            scored = [
                s for s in (r.score_for(definition.key) for r in results)
                if s is not None and s.has_data
            ]

            if not scored:
                aggregates.append(MetricAggregate(
                    metric_key=definition.key,
                    average_value=None,
                    average_score=0.0,
                    count=0,
                    status=StatusTier.NO_DATA
                ))
                continue

            average_score = statistics.mean(s.normalized_score for s in scored)
            aggregates.append(MetricAggregate(
                metric_key=definition.key,
                average_value=round_half_up(statistics.mean(s.raw_value for s in scored), 2),
                average_score=round_half_up(average_score, 2),
                count=len(scored),
                status=self.classify(average_score)
            ))

        return tuple(aggregates)
