import argparse
import yaml
from typing import Any, Dict, Optional
from .config import PolicyScopeConfig
from .enums import OutputFormat


def load_yaml_config(path: Optional[str]) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file, or None to skip loading

    Returns:
        Dictionary containing the loaded configuration, or empty dict if file not found
    """
    if not path:
        return {}
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"Config file '{path}' not found. Continuing without it.")
        return {}


def parse_cli_args() -> argparse.Namespace:
    """
    Parse command line arguments for the policyscope tool.

    Returns:
        Parsed command line arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="policyscope",
        description="PolicyScope - list the effective IAM statements of a role, assumed role or managed policy"
    )

    parser.add_argument(
        '--arn',
        type=str,
        help='ARN of managed policy, role or assumed-role session (may also be set in the config YAML)'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to optional config YAML'
    )

    # AWS access (override YAML if provided)
    parser.add_argument(
        '--region',
        type=str,
        help='AWS region for the IAM client (default us-west-2)'
    )
    parser.add_argument(
        '--profile',
        type=str,
        help='Named AWS profile to use'
    )
    parser.add_argument(
        '--assume-role-arn',
        dest='assume_role_arn',
        type=str,
        help='Role to assume before querying IAM'
    )

    # Output options
    parser.add_argument(
        '--no-color',
        dest='color',
        action='store_false',
        default=argparse.SUPPRESS,
        help='Disable colored output'
    )
    parser.add_argument(
        '--output',
        dest='output_format',
        choices=[output_format.value for output_format in OutputFormat],
        help='Output format (default text)'
    )
    parser.add_argument(
        '--log-level',
        dest='log_level',
        type=str,
        help='Logging level (default WARNING)'
    )

    return parser.parse_args()


def merge_configs(yaml_config: Dict[str, Any], cli_args: argparse.Namespace) -> PolicyScopeConfig:
    """
    Merge YAML configuration with CLI arguments and validate the result.

    Args:
        yaml_config: Configuration loaded from YAML file
        cli_args: Parsed command line arguments

    Returns:
        Validated PolicyScopeConfig object

    Raises:
        ValueError: If configuration validation fails
        TypeError: If configuration has type errors
    """
    # Start with YAML
    merged = yaml_config.copy()

    # Apply CLI overrides (only if CLI provided them)
    cli_dict = {
        k: v for k, v in vars(cli_args).items()
        if k in PolicyScopeConfig.model_fields and v is not None
    }
    merged.update(cli_dict)

    return PolicyScopeConfig(**merged)
