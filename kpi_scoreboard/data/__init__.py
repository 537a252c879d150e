"""Data-access collaborators consumed by the role aggregator."""

from .source import DataSource, InMemoryDataSource, parse_observation
from .sample import SAMPLE_USERS, sample_observations, sample_data_source

__all__ = [
    "DataSource",
    "InMemoryDataSource",
    "parse_observation",
    "SAMPLE_USERS",
    "sample_observations",
    "sample_data_source"
]
