from typing import Any, Dict, List
import argparse
import logging

from botocore.exceptions import BotoCoreError, ClientError

from .config import PolicyScopeConfig
from .usage import load_yaml_config, parse_cli_args, merge_configs
from .aws.iam import PolicyScopeError, StatementResolver
from .aws.sessions import build_session
from .output import OutputHandler
from .types import Statement

logger = logging.getLogger(__name__)


def setup_configuration(cli_args: argparse.Namespace, yaml_config: Dict[str, Any]) -> PolicyScopeConfig:
    """
    Merge and validate configuration from YAML and CLI arguments.

    Args:
        cli_args: Parsed command line arguments
        yaml_config: Configuration loaded from YAML file

    Returns:
        Validated PolicyScopeConfig object

    Raises:
        SystemExit: If configuration validation fails
    """
    try:
        final_config = merge_configs(yaml_config, cli_args)
    except (ValueError, TypeError) as e:
        OutputHandler.error("Configuration Error", e)
        exit(1)

    logging.basicConfig(level=final_config.log_level)
    logger.debug(f"Final config: {final_config.model_dump()}")

    return final_config


def resolve_statements(final_config: PolicyScopeConfig) -> List[Statement]:
    """
    Resolve the configured ARN into its statements.

    Args:
        final_config: Validated PolicyScope configuration

    Returns:
        Flattened statements for the ARN

    Raises:
        PolicyScopeError: If resolution fails
        ClientError: If role assumption fails
    """
    session = build_session(final_config)
    resolver = StatementResolver.from_session(session, detect_cycles=final_config.detect_cycles)
    statements = resolver.resolve(final_config.arn)
    logger.info(f"Resolved {len(statements)} statement(s) for {final_config.arn}")
    return statements


def main() -> None:
    """Main entry point for PolicyScope."""
    cli_args = parse_cli_args()
    yaml_config = load_yaml_config(cli_args.config)

    final_config = setup_configuration(cli_args, yaml_config)

    try:
        statements = resolve_statements(final_config)
    except PolicyScopeError as e:
        OutputHandler.error("Resolution Error", e)
        logger.error(f"Could not resolve {final_config.arn}: {e}", exc_info=True)
        exit(1)
    except ClientError as e:
        error_code = e.response['Error']['Code']
        OutputHandler.error(f"AWS API Error ({error_code})", e)
        logger.error(f"AWS API error: {e}", exc_info=True)
        exit(1)
    except BotoCoreError as e:
        OutputHandler.error("AWS Configuration Error", e)
        logger.error(f"AWS configuration error: {e}", exc_info=True)
        exit(1)

    OutputHandler.statements(
        statements,
        output_format=final_config.output_format,
        use_color=final_config.color,
    )


if __name__ == "__main__":
    main()
