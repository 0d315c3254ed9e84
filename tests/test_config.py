import pytest
from typing import cast
import argparse
from pydantic import ValidationError
from policyscope.config import PolicyScopeConfig
from policyscope.enums import OutputFormat
from policyscope.usage import merge_configs


class TestPolicyScopeConfig:
    """Test PolicyScopeConfig class with all possible configurations."""

    def test_defaults(self) -> None:
        """Test defaults when only the ARN is given."""
        config = PolicyScopeConfig(arn="arn:aws:iam::123:role/Example")
        assert config.region == "us-west-2"
        assert config.profile is None
        assert config.assume_role_arn is None
        assert config.color is True
        assert config.output_format is OutputFormat.TEXT
        assert config.detect_cycles is True
        assert config.log_level == "WARNING"

    def test_missing_arn(self) -> None:
        """Test ARN is required."""
        with pytest.raises(ValidationError) as exc_info:
            PolicyScopeConfig()  # type: ignore
        assert "arn" in str(exc_info.value)

    def test_empty_arn(self) -> None:
        """Test blank ARN is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            PolicyScopeConfig(arn="  ")
        assert "missing arn" in str(exc_info.value)

    def test_output_format_from_string(self) -> None:
        """Test output format accepts its string value."""
        config = PolicyScopeConfig(arn="x/y", output_format="json")  # type: ignore[arg-type]
        assert config.output_format is OutputFormat.JSON

    def test_invalid_output_format(self) -> None:
        """Test unknown output format is rejected."""
        with pytest.raises(ValidationError):
            PolicyScopeConfig(arn="x/y", output_format="xml")  # type: ignore[arg-type]

    def test_log_level_normalized(self) -> None:
        """Test log level is upper-cased."""
        assert PolicyScopeConfig(arn="x/y", log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        """Test unknown log level is rejected."""
        with pytest.raises(ValidationError):
            PolicyScopeConfig(arn="x/y", log_level="chatty")


class TestMergeConfigs:
    """Test merge_configs function."""

    def test_cli_overrides_yaml(self) -> None:
        """Test CLI values win over YAML values."""
        yaml_config = {"arn": "arn:aws:iam::123:role/FromYaml", "region": "eu-west-1", "profile": "yaml"}
        cli_args = argparse.Namespace(
            arn="arn:aws:iam::123:role/FromCli",
            config="c.yaml",
            region=None,
            profile="cli",
            assume_role_arn=None,
            output_format=None,
            log_level=None
        )

        config = merge_configs(yaml_config, cli_args)

        assert config.arn == "arn:aws:iam::123:role/FromCli"
        assert config.region == "eu-west-1"
        assert config.profile == "cli"

    def test_no_color_flag(self) -> None:
        """Test --no-color result overrides YAML color setting."""
        cli_args = argparse.Namespace(arn="x/y", config=None, color=False)

        config = merge_configs({"color": True}, cli_args)

        assert config.color is False

    def test_yaml_does_not_mutate(self) -> None:
        """Test YAML dict passed in is left unchanged."""
        yaml_config = {"region": "eu-west-1"}
        merge_configs(yaml_config, argparse.Namespace(arn="x/y"))
        assert yaml_config == {"region": "eu-west-1"}

    def test_invalid_merged_config(self) -> None:
        """Test validation errors surface as ValueError."""
        with pytest.raises(ValueError):
            merge_configs({"detect_cycles": "not-a-bool"}, cast(argparse.Namespace, argparse.Namespace(arn="x/y")))
