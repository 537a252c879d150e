"""Tests for the error hierarchy."""

import pytest

from kpi_scoreboard.core.errors import (
    ConfigurationError,
    EmptyPopulationError,
    InvalidRoleError,
    InvalidUserError,
    KPIError,
    LookupFailure,
    UnknownMetricError,
    UnknownTeamError,
    UnknownUserError,
    UserNotFoundError,
    ValidationError,
)


@pytest.mark.parametrize("error,kind,base", [
    (InvalidUserError(""), "validation", ValidationError),
    (InvalidRoleError("root"), "validation", ValidationError),
    (UnknownMetricError("csat"), "validation", ValidationError),
    (UnknownUserError("AGT-1"), "not_found", LookupFailure),
    (UnknownTeamError("TEAM-1"), "not_found", LookupFailure),
    (ConfigurationError("bad weights"), "configuration", KPIError),
    (EmptyPopulationError(), "empty_population", KPIError),
])
def test_kinds_and_hierarchy(error, kind, base):
    assert error.kind == kind
    assert isinstance(error, base)
    assert isinstance(error, KPIError)


def test_user_not_found_alias():
    assert UserNotFoundError is UnknownUserError


def test_to_dict_carries_context():
    error = UnknownUserError("AGT-7", scope="TEAM-1")
    assert error.to_dict() == {
        "kind": "not_found",
        "message": "User not found: AGT-7",
        "context": {"user_id": "AGT-7", "scope": "TEAM-1"},
    }


def test_str_is_message():
    assert str(UnknownTeamError("TEAM-9")) == "Team not found: TEAM-9"
