"""
Sample Population

A small deterministic organisation used by the demo script: two teams of
uneven size, one manager, one leadership and one admin account, and a week
of daily observations per agent.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from ..core.entities import Role, UserProfile, UserStatus
from ..core.schemas import MetricObservation
from .source import InMemoryDataSource

SAMPLE_USERS: tuple[UserProfile, ...] = (
    UserProfile("AGT-001", "Sarah Chen", Role.AGENT, "TEAM-A", "Sales"),
    UserProfile("AGT-002", "David Chen", Role.AGENT, "TEAM-A", "Support"),
    UserProfile("AGT-003", "Maria Rodriguez", Role.AGENT, "TEAM-A", "Sales"),
    UserProfile("AGT-004", "James Wilson", Role.AGENT, "TEAM-B", "Support"),
    UserProfile("AGT-005", "Emily Davis", Role.AGENT, "TEAM-B", "Support"),
    UserProfile("AGT-006", "Tom Harris", Role.AGENT, "TEAM-B", "Support", UserStatus.INACTIVE),
    UserProfile("MGR-001", "Robert Fox", Role.MANAGER, "TEAM-A", "Sales"),
    UserProfile("LDR-001", "Lisa Moreno", Role.LEADERSHIP, None, "Executive"),
    UserProfile("ADM-001", "Alex Kim", Role.ADMIN, None, "IT"),
)

# Starting values per agent: (aht minutes, qa score, revenue, nps)
_BASELINES = {
    "AGT-001": (18.0, 4.2, 560.0, 62.0),
    "AGT-002": (22.0, 3.9, 480.0, 41.0),
    "AGT-003": (19.5, 3.6, 430.0, 55.0),
    "AGT-004": (31.0, 2.4, 210.0, 18.0),
    "AGT-005": (24.0, 3.3, 380.0, 35.0),
}

# Per-day drift as a fraction of the baseline (positive means improving)
_DRIFT = {
    "AGT-001": 0.01,
    "AGT-002": 0.0,
    "AGT-003": 0.03,
    "AGT-004": -0.02,
    "AGT-005": 0.015,
}


def sample_observations(end_date: date, days: int = 7) -> list[MetricObservation]:
    """Daily observations for every sample agent, ending at ``end_date``."""
    observations = []

    for user_id, (aht, qa, revenue, nps) in _BASELINES.items():
        drift = _DRIFT[user_id]
        for offset in range(days - 1, -1, -1):
            day = end_date - timedelta(days=offset)
            step = days - 1 - offset
            factor = 1 + drift * step
            stamp = datetime.combine(day, time(17, 0), tzinfo=timezone.utc)

            values = {
                "aht": aht / factor,
                "qa": qa * factor,
                "revenue": revenue * factor,
                "nps": nps * factor,
            }
            for metric_key, value in values.items():
                observations.append(MetricObservation(
                    user_id=user_id,
                    metric_key=metric_key,
                    raw_value=round(value, 2),
                    timestamp=stamp
                ))

    return observations


def sample_data_source(end_date: Optional[date] = None, days: int = 7) -> InMemoryDataSource:
    """Build the demo data source."""
    end_date = end_date or datetime.now(timezone.utc).date()
    return InMemoryDataSource(
        users=SAMPLE_USERS,
        observations=sample_observations(end_date, days),
        teams=("TEAM-A", "TEAM-B", "TEAM-C")
    )
