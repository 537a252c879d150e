"""
Scoreboard Errors

Typed failures surfaced by the engine. Every error carries a machine-readable
``kind``, a human-readable ``message`` and a ``context`` dict with the
identifiers involved, so the HTTP layer can map them to responses without
parsing strings.

Hierarchy:
- KPIError
  - ValidationError: InvalidUserError, InvalidRoleError, UnknownMetricError
  - LookupFailure: UnknownUserError (UserNotFoundError), UnknownTeamError
  - ConfigurationError
  - EmptyPopulationError
"""

from typing import Any, Optional


class KPIError(Exception):
    """Base class for all scoreboard errors."""
    kind = "error"

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "message": self.message,
            "context": dict(self.context)
        }


class ValidationError(KPIError):
    """Malformed identifier or out-of-range input."""
    kind = "validation"


class InvalidUserError(ValidationError):
    """User id is empty or does not match the configured id pattern."""

    def __init__(self, user_id: Any):
        super().__init__(f"Invalid user ID format: {user_id!r}", {"user_id": user_id})


class InvalidRoleError(ValidationError):
    """Role is not one of agent, manager, leadership, admin."""

    def __init__(self, role: Any):
        super().__init__(f"Invalid role: {role!r}", {"role": role})


class UnknownMetricError(ValidationError):
    """Metric key is not registered in the catalog."""

    def __init__(self, metric_key: str):
        super().__init__(f"Unknown metric: {metric_key}", {"metric_key": metric_key})


class LookupFailure(KPIError):
    """A data source lookup missed."""
    kind = "not_found"


class UnknownUserError(LookupFailure):
    """User id is not known to the data source or population."""

    def __init__(self, user_id: str, scope: Optional[str] = None):
        context = {"user_id": user_id}
        if scope is not None:
            context["scope"] = scope
        super().__init__(f"User not found: {user_id}", context)


UserNotFoundError = UnknownUserError


class UnknownTeamError(LookupFailure):
    """Team id is not known to the data source."""

    def __init__(self, team_id: str):
        super().__init__(f"Team not found: {team_id}", {"team_id": team_id})


class ConfigurationError(KPIError):
    """Invalid static configuration. Raised at startup, never per request."""
    kind = "configuration"


class EmptyPopulationError(KPIError):
    """Ranking was requested over zero users."""
    kind = "empty_population"

    def __init__(self, scope: Optional[str] = None):
        super().__init__(
            "Cannot rank an empty population",
            {"scope": scope} if scope is not None else {}
        )
