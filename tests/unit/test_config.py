"""Unit tests for configuration management."""

import pytest
from pathlib import Path

import yaml

from market_ca.config.defaults import RuleParams, get_default_config
from market_ca.config.loader import ConfigLoader
from market_ca.config.validation import ConfigValidator
from market_ca.errors import ConfigurationError


def write_config(config_dir: Path, content: dict) -> None:
    with open(config_dir / "simulation.yaml", "w") as f:
        yaml.safe_dump(content, f)


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_rule_thresholds(self) -> None:
        config = get_default_config()

        assert config.rule.moderate_min == 4
        assert config.rule.moderate_max == 7
        assert config.rule.contrarian_min == 7
        assert config.rule.reversal_min == 4
        assert config.rule.take_profit_pct == 45.0
        assert config.rule.exit_pct == 20.0

    def test_default_grid_and_history(self) -> None:
        config = get_default_config()

        assert config.grid.width == 20
        assert config.grid.height == 20
        assert config.price_history.window_size == 500


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()

        assert isinstance(loader.config_dir, Path)

    def test_merge_config_defaults_only(self, tmp_path: Path) -> None:
        loader = ConfigLoader.create(tmp_path)

        config = loader.merge_config()

        assert config["rule"]["moderate_min"] == 4
        assert config["grid"]["width"] == 20

    def test_file_overrides_defaults(self, tmp_path: Path) -> None:
        write_config(tmp_path, {"grid": {"width": 8}, "rule": {"exit_pct": 25.0}})
        loader = ConfigLoader.create(tmp_path)

        config = loader.merge_config()

        assert config["grid"]["width"] == 8
        assert config["grid"]["height"] == 20
        assert config["rule"]["exit_pct"] == 25.0
        assert config["rule"]["take_profit_pct"] == 45.0

    def test_explicit_overrides_win(self, tmp_path: Path) -> None:
        write_config(tmp_path, {"grid": {"width": 8}})
        loader = ConfigLoader.create(tmp_path)

        config = loader.merge_config({"grid": {"width": 12}})

        assert config["grid"]["width"] == 12

    def test_empty_file_falls_back_to_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "simulation.yaml").write_text("")
        loader = ConfigLoader.create(tmp_path)

        assert loader.merge_config()["rule"]["reversal_min"] == 4

    def test_load_builds_typed_config(self, tmp_path: Path) -> None:
        write_config(tmp_path, {"rule": {"reversal_min": 5}, "grid": {"width": 3, "height": 2}})
        loader = ConfigLoader.create(tmp_path)

        config = loader.load()

        assert config.rule == RuleParams(reversal_min=5)
        assert config.grid.width == 3
        assert config.grid.height == 2

    def test_load_rejects_invalid_config(self, tmp_path: Path) -> None:
        write_config(tmp_path, {"rule": {"moderate_min": 9}})
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load()

        assert exc_info.value.errors[0].field == "moderate_min"

    def test_repository_config_is_valid(self) -> None:
        config = ConfigLoader.create().load()

        assert config.rule == RuleParams()


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_rule_params(self) -> None:
        errors = ConfigValidator.validate_rule_params({"moderate_min": 3, "moderate_max": 6})

        assert errors == []

    def test_count_out_of_range(self) -> None:
        errors = ConfigValidator.validate_rule_params({"contrarian_min": 10})

        assert len(errors) == 1
        assert errors[0].field == "contrarian_min"

    def test_band_must_be_ordered(self) -> None:
        errors = ConfigValidator.validate_rule_params({"moderate_min": 5, "moderate_max": 5})

        assert [e.field for e in errors] == ["moderate_max"]

    def test_boolean_is_not_a_count(self) -> None:
        errors = ConfigValidator.validate_rule_params({"reversal_min": True})

        assert errors[0].field == "reversal_min"

    def test_non_numeric_threshold(self) -> None:
        errors = ConfigValidator.validate_rule_params({"exit_pct": "twenty"})

        assert errors[0].field == "exit_pct"

    def test_unknown_parameter(self) -> None:
        errors = ConfigValidator.validate_rule_params({"panic_level": 3})

        assert errors[0].field == "panic_level"
        assert errors[0].message == "Unknown parameter"

    def test_grid_dimensions_must_be_positive(self) -> None:
        errors = ConfigValidator.validate_grid_params({"width": 0, "height": -1})

        assert {e.field for e in errors} == {"width", "height"}

    def test_validate_config_collects_all_sections(self) -> None:
        errors = ConfigValidator.validate_config({
            "rule": {"exit_pct": None},
            "grid": {"width": 0},
            "price_history": {"window_size": 0},
        })

        assert {e.field for e in errors} == {"exit_pct", "width", "window_size"}


class TestMalformedConfigFile:
    """YAML that parses but has the wrong shape is reported, not crashed on."""

    @pytest.mark.parametrize("content,section", [
        ("rule:\n", "rule"),
        ("grid: 5\n", "grid"),
        ("price_history: [1, 2]\n", "price_history"),
    ])
    def test_non_mapping_section_rejected(self, tmp_path: Path, content: str, section: str) -> None:
        (tmp_path / "simulation.yaml").write_text(content)
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load()

        assert [e.field for e in exc_info.value.errors] == [section]
        assert exc_info.value.errors[0].message == "Must be a mapping"

    @pytest.mark.parametrize("content", ["- 1\n- 2\n", "5\n", "just text\n"])
    def test_non_mapping_top_level_rejected(self, tmp_path: Path, content: str) -> None:
        (tmp_path / "simulation.yaml").write_text(content)
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            loader.load()

    def test_engine_construction_reports_bad_file(self, tmp_path: Path) -> None:
        from market_ca.engine import SimulationEngine

        (tmp_path / "simulation.yaml").write_text("grid: 5\n")

        with pytest.raises(ConfigurationError):
            SimulationEngine(config_dir=tmp_path)

    def test_validate_config_flags_non_mapping_section(self) -> None:
        errors = ConfigValidator.validate_config({"rule": None, "grid": {"width": 3}})

        assert len(errors) == 1
        assert errors[0].field == "rule"
        assert errors[0].value is None


class TestThresholdOrdering:
    """Cross-field ordering between rule thresholds."""

    def test_contrarian_inside_momentum_band(self) -> None:
        errors = ConfigValidator.validate_rule_params({"contrarian_min": 5})

        assert [e.field for e in errors] == ["contrarian_min"]

    def test_contrarian_checked_against_overridden_band(self) -> None:
        errors = ConfigValidator.validate_rule_params({"moderate_max": 8, "contrarian_min": 7})

        assert [e.field for e in errors] == ["contrarian_min"]

    def test_contrarian_at_band_edge_is_valid(self) -> None:
        assert ConfigValidator.validate_rule_params({"moderate_max": 6, "contrarian_min": 6}) == []

    def test_take_profit_below_exit(self) -> None:
        errors = ConfigValidator.validate_rule_params({"take_profit_pct": 10.0})

        assert [e.field for e in errors] == ["take_profit_pct"]

    def test_equal_exit_tiers_are_valid(self) -> None:
        assert ConfigValidator.validate_rule_params({"take_profit_pct": 30.0, "exit_pct": 30.0}) == []
