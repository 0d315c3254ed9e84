"""AWS session management utilities."""

import logging
from typing import Optional

from boto3.session import Session
from mypy_boto3_sts.client import STSClient
from mypy_boto3_sts.type_defs import AssumeRoleResponseTypeDef, CredentialsTypeDef

from ..config import PolicyScopeConfig
from ..constants import ASSUMED_SESSION_NAME

logger = logging.getLogger(__name__)


def assume_role(
    role_arn: str,
    session_name: str,
    base_session: Optional[Session] = None,
    region_name: Optional[str] = None
) -> Session:
    """
    Assume an IAM role and return a session with temporary credentials.

    Args:
        role_arn: ARN of the role to assume
        session_name: Name for the role session
        base_session: Session to use for assuming role (defaults to boto3.Session())
        region_name: Region for the returned session

    Returns:
        boto3 Session with assumed role credentials

    Raises:
        ClientError: If role assumption fails (AccessDenied, InvalidParameterValue, etc.)
    """
    if base_session is None:
        base_session = Session()

    sts: STSClient = base_session.client("sts")
    resp: AssumeRoleResponseTypeDef = sts.assume_role(
        RoleArn=role_arn,
        RoleSessionName=session_name
    )

    creds: CredentialsTypeDef = resp["Credentials"]
    return Session(
        aws_access_key_id=creds["AccessKeyId"],
        aws_secret_access_key=creds["SecretAccessKey"],
        aws_session_token=creds["SessionToken"],
        region_name=region_name
    )


def build_session(config: PolicyScopeConfig) -> Session:
    """
    Build the boto3 session used to query IAM.

    Uses the configured profile and region, then assumes assume_role_arn
    when one is set.

    Args:
        config: Validated PolicyScope configuration

    Returns:
        boto3 Session for the account being inspected
    """
    session = Session(profile_name=config.profile, region_name=config.region)
    if not config.assume_role_arn:
        return session

    logger.info(f"Assuming {config.assume_role_arn} before inspecting IAM")
    return assume_role(
        config.assume_role_arn,
        ASSUMED_SESSION_NAME,
        base_session=session,
        region_name=config.region
    )
