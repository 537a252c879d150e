"""Shared test fixtures for the scoreboard test suite."""

from datetime import datetime, timezone

import pytest

from kpi_scoreboard.config.settings import Settings
from kpi_scoreboard.core.entities import MetricDirection, Role, UserProfile, UserStatus
from kpi_scoreboard.core.schemas import MetricDefinition, MetricObservation
from kpi_scoreboard.data.source import InMemoryDataSource
from kpi_scoreboard.metrics.calculator import ScoreCalculator
from kpi_scoreboard.metrics.catalog import MetricCatalog
from kpi_scoreboard.roles.aggregator import RoleAggregator


NOW = datetime(2026, 2, 15, 12, 0, 0, tzinfo=timezone.utc)


# ── Configuration ───────────────────────────────────────────────────────

@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def catalog():
    """Two equally weighted metrics: AHT (lower is better) and QA."""
    return MetricCatalog([
        MetricDefinition(
            key="aht",
            display_name="Average Handle Time",
            weight=0.5,
            direction=MetricDirection.LOWER_IS_BETTER,
            target=20.0,
            unit="minutes"
        ),
        MetricDefinition(
            key="qa",
            display_name="Quality Assurance Score",
            weight=0.5,
            direction=MetricDirection.HIGHER_IS_BETTER,
            target=4.0
        ),
    ])


@pytest.fixture
def calculator(catalog, settings):
    return ScoreCalculator(catalog=catalog, settings=settings)


# ── Observation Factory ─────────────────────────────────────────────────

@pytest.fixture
def make_observation():
    """Factory fixture for MetricObservation with sensible defaults.

    Usage:
        obs = make_observation(metric_key="qa", raw_value=3.5)
    """
    def _factory(**overrides):
        defaults = {
            "user_id": "AGT-001",
            "metric_key": "aht",
            "raw_value": 20.0,
            "timestamp": NOW,
        }
        defaults.update(overrides)
        return MetricObservation(**defaults)

    return _factory


# ── Organisation ────────────────────────────────────────────────────────

@pytest.fixture
def org_users():
    """Two staffed teams of unequal size, one empty team, plus non-scored users."""
    return [
        UserProfile("AGT-101", "Sarah Chen", Role.AGENT, "TEAM-1", "Sales"),
        UserProfile("AGT-102", "David Chen", Role.AGENT, "TEAM-1", "Support"),
        UserProfile("AGT-103", "Tom Harris", Role.AGENT, "TEAM-1", "Support", UserStatus.INACTIVE),
        UserProfile("AGT-201", "Maria Rodriguez", Role.AGENT, "TEAM-2", "Sales"),
        UserProfile("MGR-100", "Robert Fox", Role.MANAGER, "TEAM-1", "Sales"),
    ]


@pytest.fixture
def org_source(org_users, make_observation):
    """AGT-101 scores 100, AGT-102 has no data (0), AGT-201 scores 60."""
    observations = [
        make_observation(user_id="AGT-101", metric_key="aht", raw_value=20.0),
        make_observation(user_id="AGT-101", metric_key="qa", raw_value=4.0),
        make_observation(user_id="AGT-201", metric_key="aht", raw_value=20.0),
        make_observation(user_id="AGT-201", metric_key="qa", raw_value=0.8),
    ]
    return InMemoryDataSource(
        users=org_users,
        observations=observations,
        teams=("TEAM-1", "TEAM-2", "TEAM-3")
    )


@pytest.fixture
def aggregator(org_source, calculator, settings):
    return RoleAggregator(org_source, calculator=calculator, settings=settings)
