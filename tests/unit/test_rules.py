"""
Rules loading tests.

Verifies that the rules loader reads rules.yaml and rejects invalid
configuration with a clear error.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from src.components.redirect import RiskLevel
from src.rules.loader import load_rules
from src.rules.models import Rules


def write_rules(tmp_path: Path, rules: dict[str, Any]) -> Path:
    path = tmp_path / "rules.yaml"
    with open(path, "w") as f:
        yaml.dump(rules, f)
    return path


class TestRulesLoading:
    """Test rules file loading."""

    def test_load_project_rules(self, rules: Rules) -> None:
        assert rules.annotations.prefix == "nginx.ingress.kubernetes.io"
        assert rules.annotations.risk_level is RiskLevel.CRITICAL
        assert rules.logging.level == "INFO"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "nope.yaml")

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("")

        assert load_rules(path) == Rules()

    def test_custom_values(self, tmp_path: Path) -> None:
        path = write_rules(
            tmp_path,
            {"annotations": {"prefix": "example.com", "max_risk": "Medium"}},
        )

        rules = load_rules(path)

        assert rules.annotations.prefix == "example.com"
        assert rules.annotations.risk_level is RiskLevel.MEDIUM

    def test_markdown_fenced_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.md"
        path.write_text(
            "# Rules\n\nSome prose.\n\n```yaml\nannotations:\n  prefix: example.com\n```\n"
        )

        assert load_rules(path).annotations.prefix == "example.com"


class TestRulesValidation:
    """Test schema errors."""

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("annotations: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(path)

    def test_unknown_risk(self, tmp_path: Path) -> None:
        path = write_rules(tmp_path, {"annotations": {"max_risk": "Extreme"}})

        with pytest.raises(ValueError, match="max_risk"):
            load_rules(path)

    @pytest.mark.parametrize("prefix", ["", "example.com/"])
    def test_bad_prefix(self, tmp_path: Path, prefix: str) -> None:
        path = write_rules(tmp_path, {"annotations": {"prefix": prefix}})

        with pytest.raises(ValueError, match="prefix"):
            load_rules(path)

    def test_unknown_log_level(self, tmp_path: Path) -> None:
        path = write_rules(tmp_path, {"logging": {"level": "verbose"}})

        with pytest.raises(ValueError, match="level must be one of"):
            load_rules(path)

    def test_log_level_normalised(self, tmp_path: Path) -> None:
        path = write_rules(tmp_path, {"logging": {"level": "debug"}})

        assert load_rules(path).logging.level == "DEBUG"

    def test_unknown_section(self, tmp_path: Path) -> None:
        path = write_rules(tmp_path, {"database": {"url": "sqlite://"}})

        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(path)
