from typing import Optional
from pydantic import BaseModel, field_validator

from .constants import DEFAULT_LOG_LEVEL, DEFAULT_REGION
from .enums import OutputFormat


class PolicyScopeConfig(BaseModel):
    # Policy, role or assumed-role ARN to resolve
    arn: str
    region: str = DEFAULT_REGION
    # Named AWS profile; None uses the default credential chain
    profile: Optional[str] = None
    # Role to assume before querying IAM (e.g. to inspect another account)
    assume_role_arn: Optional[str] = None
    color: bool = True
    output_format: OutputFormat = OutputFormat.TEXT
    # Fail instead of recursing forever when a reference is attached to itself
    detect_cycles: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("arn")
    @classmethod
    def arn_must_not_be_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("missing arn")
        return value

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level
