"""
Configuration Management

Centralized configuration for:
- Status tier thresholds
- Metric catalog overrides
- Identifier validation
- Logging
"""

from .settings import Settings, get_settings
from .log_setup import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging"
]
