"""Tests for config schema models and YAML loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from piishield.config.loader import ConfigValidationError, load_config
from piishield.config.schema import (
    DEFAULT_CONFIG,
    MAX_DEPTH_LIMIT,
    FieldRuleSpec,
    LogLevel,
    PIIShieldConfig,
)
from piishield.sanitize.models import PIICategory
from piishield.sanitize.rules import CLASSIFICATION_RULES

FIXTURES = Path(__file__).parent / "fixtures"


class TestFieldRuleSpec:
    def test_pattern_normalized(self) -> None:
        spec = FieldRuleSpec(pattern="Loyalty_Number")
        assert spec.pattern == "loyaltynumber"
        assert spec.category == PIICategory.GENERIC

    def test_empty_pattern_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FieldRuleSpec(pattern=" - ")

    def test_to_rule(self) -> None:
        rule = FieldRuleSpec(pattern="vin", category="generic", exact=True).to_rule()
        assert rule.pattern == "vin"
        assert rule.exact is True


class TestPIIShieldConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.max_depth == 64
        assert DEFAULT_CONFIG.scan_strings is True
        assert DEFAULT_CONFIG.rules == CLASSIFICATION_RULES
        assert DEFAULT_CONFIG.logging.level == LogLevel.INFO

    def test_max_depth_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            PIIShieldConfig(max_depth=0)

    def test_max_depth_has_ceiling(self) -> None:
        assert PIIShieldConfig(max_depth=MAX_DEPTH_LIMIT).max_depth == MAX_DEPTH_LIMIT
        with pytest.raises(ValidationError):
            PIIShieldConfig(max_depth=100_000)

    def test_rules_include_extras_last(self) -> None:
        config = PIIShieldConfig(extra_fields=[{"pattern": "badge"}])
        assert config.rules[-1].pattern == "badge"
        assert len(config.rules) == len(CLASSIFICATION_RULES) + 1

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.max_depth = 3  # type: ignore[misc]

    def test_log_level_priority(self) -> None:
        assert LogLevel.DEBUG.priority < LogLevel.INFO.priority < LogLevel.WARN.priority
        assert LogLevel.WARN.priority < LogLevel.ERROR.priority


class TestLoadConfig:
    def test_full_config(self) -> None:
        config = load_config(FIXTURES / "full_config.yaml")
        assert config.max_depth == 16
        assert [s.pattern for s in config.extra_fields] == ["loyaltynumber", "vin"]
        assert config.extra_fields[1].exact is True
        assert config.logging.level == LogLevel.WARN
        assert config.logging.console is False

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ConfigValidationError, match="empty"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(path)
        assert exc_info.value.details[0]["type"] == "not_a_mapping"

    def test_bad_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("max_depth: [unclosed\n")
        with pytest.raises(ConfigValidationError, match="Failed to parse YAML"):
            load_config(path)

    def test_schema_errors_listed(self) -> None:
        path = FIXTURES / "invalid_config.yaml"
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(path)
        message = str(exc_info.value)
        assert "max_depth" in message
        assert "extra_fields" in message
        assert exc_info.value.path == path

    def test_error_locations_use_field_paths(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(FIXTURES / "invalid_config.yaml")
        locs = [d["loc"] for d in exc_info.value.details]
        assert "max_depth" in locs
        assert "extra_fields[0].pattern" in locs

    def test_unknown_category_reported_at_its_path(self, tmp_path: Path) -> None:
        path = tmp_path / "piishield.yaml"
        path.write_text('version: "1.0"\nextra_fields:\n  - pattern: badge\n    category: shoe_size\n')
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(path)
        assert "extra_fields[0].category" in str(exc_info.value)

    def test_max_depth_above_ceiling_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "piishield.yaml"
        path.write_text('version: "1.0"\nmax_depth: 100000\n')
        with pytest.raises(ConfigValidationError, match="max_depth"):
            load_config(path)

    def test_extra_rule_shadowed_by_builtin(self, tmp_path: Path) -> None:
        path = tmp_path / "piishield.yaml"
        path.write_text('version: "1.0"\nextra_fields:\n  - pattern: badge\n  - pattern: backup_email\n')
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(path)
        details = exc_info.value.details
        assert [d["type"] for d in details] == ["shadowed_rule"]
        assert details[0]["loc"] == "extra_fields[1].pattern"
        assert "'email'" in details[0]["msg"]

    def test_exact_builtin_does_not_shadow_substring_extra(self, tmp_path: Path) -> None:
        path = tmp_path / "piishield.yaml"
        path.write_text('version: "1.0"\nextra_fields:\n  - pattern: pin\n')
        config = load_config(path)
        assert [s.pattern for s in config.extra_fields] == ["pin"]
