"""
Metric Catalog

Static registry of the metrics that make up a user's overall score.
The catalog is built once at process start, validated, and only read
afterwards. A catalog whose weights do not sum to 1.0 is a fatal
configuration error.
"""

import logging
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from ..config.settings import Settings, get_settings
from ..core.entities import MetricDirection
from ..core.errors import ConfigurationError, UnknownMetricError
from ..core.schemas import MetricDefinition

logger = logging.getLogger(__name__)


DEFAULT_METRICS: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        key="aht",
        display_name="Average Handle Time",
        weight=0.25,
        direction=MetricDirection.LOWER_IS_BETTER,
        target=20.0,
        unit="minutes"
    ),
    MetricDefinition(
        key="qa",
        display_name="Quality Assurance Score",
        weight=0.45,
        direction=MetricDirection.HIGHER_IS_BETTER,
        target=4.0
    ),
    MetricDefinition(
        key="revenue",
        display_name="Revenue",
        weight=0.30,
        direction=MetricDirection.HIGHER_IS_BETTER,
        target=500.0,
        unit="$"
    ),
    MetricDefinition(
        key="nps",
        display_name="Net Promoter Score",
        weight=0.0,  # tracked for display, not scored
        direction=MetricDirection.HIGHER_IS_BETTER,
        target=50.0
    )
)


class MetricCatalog:
    """
    Immutable registry of metric definitions.

    Definitions keep their insertion order, which fixes the order of every
    per-metric breakdown the engine produces.
    """

    def __init__(
        self,
        definitions: Iterable[MetricDefinition],
        weight_tolerance: float = 1e-9
    ):
        ordered: dict[str, MetricDefinition] = {}
        for definition in definitions:
            if definition.key in ordered:
                raise ConfigurationError(
                    f"Duplicate metric key: {definition.key}",
                    {"metric_key": definition.key}
                )
            ordered[definition.key] = definition

        if not ordered:
            raise ConfigurationError("Metric catalog must define at least one metric")

        total = sum(d.weight for d in ordered.values())
        if abs(total - 1.0) > weight_tolerance:
            logger.error("Metric weights sum to %s, expected 1.0", total)
            raise ConfigurationError(
                f"Metric weights must sum to 1.0, got {total}",
                {"weight_sum": total, "metrics": list(ordered)}
            )

        self._definitions = ordered
        self._ordered = tuple(ordered.values())

    def definition_for(self, metric_key: str) -> MetricDefinition:
        """Get the definition for a metric key."""
        try:
            return self._definitions[metric_key]
        except KeyError:
            raise UnknownMetricError(metric_key) from None

    def all_definitions(self) -> tuple[MetricDefinition, ...]:
        """All definitions in registration order."""
        return self._ordered

    def keys(self) -> tuple[str, ...]:
        return tuple(self._definitions)

    @property
    def total_weight(self) -> float:
        return sum(d.weight for d in self._ordered)

    def __contains__(self, metric_key: object) -> bool:
        return metric_key in self._definitions

    def __iter__(self) -> Iterator[MetricDefinition]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"MetricCatalog({list(self._definitions)})"


def build_catalog(settings: Optional[Settings] = None) -> MetricCatalog:
    """Build a catalog from settings, falling back to the default metrics."""
    settings = settings or get_settings()
    definitions = settings.metrics if settings.metrics else DEFAULT_METRICS
    catalog = MetricCatalog(definitions, weight_tolerance=settings.weight_tolerance)
    logger.info("Metric catalog loaded: %s", ", ".join(catalog.keys()))
    return catalog


@lru_cache()
def get_catalog() -> MetricCatalog:
    """Get the process-wide catalog built from the cached settings."""
    return build_catalog(get_settings())
