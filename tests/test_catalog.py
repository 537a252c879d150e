"""Tests for the metric catalog and the settings that feed it."""

import pydantic
import pytest

from kpi_scoreboard.config.settings import Settings
from kpi_scoreboard.core.entities import MetricDirection
from kpi_scoreboard.core.errors import ConfigurationError, UnknownMetricError
from kpi_scoreboard.core.schemas import MetricDefinition
from kpi_scoreboard.metrics.catalog import DEFAULT_METRICS, MetricCatalog, build_catalog


def _definition(key, weight, **overrides):
    fields = {"key": key, "weight": weight, "target": 10.0}
    fields.update(overrides)
    return MetricDefinition(**fields)


class TestMetricCatalog:
    def test_default_metrics_weights_sum_to_one(self):
        catalog = MetricCatalog(DEFAULT_METRICS)
        assert catalog.total_weight == pytest.approx(1.0)
        assert catalog.keys() == ("aht", "qa", "revenue", "nps")

    def test_definition_for_known_key(self, catalog):
        definition = catalog.definition_for("aht")
        assert definition.direction == MetricDirection.LOWER_IS_BETTER
        assert definition.target == 20.0

    def test_definition_for_unknown_key_raises(self, catalog):
        with pytest.raises(UnknownMetricError) as exc:
            catalog.definition_for("csat")
        assert exc.value.context == {"metric_key": "csat"}

    def test_all_definitions_keep_insertion_order(self):
        catalog = MetricCatalog([
            _definition("z", 0.2),
            _definition("a", 0.3),
            _definition("m", 0.5),
        ])
        assert [d.key for d in catalog.all_definitions()] == ["z", "a", "m"]
        assert [d.key for d in catalog] == ["z", "a", "m"]

    def test_weights_not_summing_to_one_is_fatal(self):
        """0.5 + 0.4 = 0.9 → ConfigurationError at construction."""
        with pytest.raises(ConfigurationError) as exc:
            MetricCatalog([_definition("a", 0.5), _definition("b", 0.4)])
        assert exc.value.kind == "configuration"
        assert exc.value.context["weight_sum"] == pytest.approx(0.9)

    def test_weights_within_tolerance_accepted(self):
        catalog = MetricCatalog([
            _definition("a", 0.1),
            _definition("b", 0.2),
            _definition("c", 0.7),
        ])
        assert len(catalog) == 3

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ConfigurationError):
            MetricCatalog([_definition("a", 0.5), _definition("a", 0.5)])

    def test_empty_catalog_rejected(self):
        with pytest.raises(ConfigurationError):
            MetricCatalog([])

    def test_membership(self, catalog):
        assert "qa" in catalog
        assert "revenue" not in catalog


class TestMetricDefinition:
    def test_definition_is_frozen(self):
        definition = _definition("a", 1.0)
        with pytest.raises(pydantic.ValidationError):
            definition.weight = 0.5

    @pytest.mark.parametrize("overrides", [
        {"target": 0.0},
        {"target": -5.0},
        {"weight": 1.5},
        {"weight": -0.1},
        {"key": ""},
    ])
    def test_invalid_definitions_rejected(self, overrides):
        fields = {"key": "a", "weight": 1.0, "target": 10.0}
        fields.update(overrides)
        with pytest.raises(pydantic.ValidationError):
            MetricDefinition(**fields)


class TestBuildCatalog:
    def test_defaults_when_no_metrics_configured(self, settings):
        catalog = build_catalog(settings)
        assert catalog.keys() == tuple(d.key for d in DEFAULT_METRICS)

    def test_metrics_from_settings(self):
        settings = Settings(
            _env_file=None,
            metrics=[
                {"key": "csat", "weight": 0.6, "target": 90},
                {"key": "aht", "weight": 0.4, "target": 300, "direction": "lower-is-better"},
            ]
        )
        catalog = build_catalog(settings)
        assert catalog.keys() == ("csat", "aht")
        assert not catalog.definition_for("aht").higher_is_better

    def test_bad_weights_in_settings_are_fatal(self):
        settings = Settings(
            _env_file=None,
            metrics=[{"key": "csat", "weight": 0.6, "target": 90}]
        )
        with pytest.raises(ConfigurationError):
            build_catalog(settings)


class TestSettings:
    def test_default_thresholds(self, settings):
        assert settings.threshold_excellent == 90
        assert settings.threshold_on_track == 75
        assert settings.threshold_at_risk == 50

    def test_thresholds_must_descend(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None, threshold_excellent=70)

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("KPI_TREND_DAYS", "14")
        monkeypatch.setenv("KPI_LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.trend_days == 14
        assert settings.log_level == "DEBUG"
