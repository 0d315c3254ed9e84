"""
Statement resolution for IAM roles, assumed-role sessions and managed policies.

A role's effective statements are those of every attached managed policy,
followed by those of every inline policy, each in listing order. Managed
policies are resolved through the same entry point as the top-level reference.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import List, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_iam.client import IAMClient

from ...enums import ReferenceKind
from ...types import Statement
from .documents import decode_document
from .errors import (
    AttachedPolicyError,
    CycleDetectedError,
    IdentityProviderError,
    MissingDocumentError,
    NoDefaultVersionError,
    PolicyScopeError,
    UnsupportedReferenceKindError,
)
from .references import classify, entity_name

# Set up logging
logger = logging.getLogger(__name__)

ROLE_KINDS = frozenset({ReferenceKind.ROLE, ReferenceKind.ASSUMED_ROLE})


@contextmanager
def _identity_provider_call(entity: str, operation: str) -> Iterator[None]:
    """Convert a botocore error raised inside the block into an IdentityProviderError."""
    logger.debug(f"Calling {operation} for {entity}")
    try:
        yield
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Failed {operation} for '{entity}': {e}")
        raise IdentityProviderError(entity, operation, e) from e


class StatementResolver:
    """
    Resolve an IAM reference into the flattened list of statements that apply to it.

    Resolution is depth-first and sequential. Nothing is cached between calls
    to resolve().

    Args:
        iam_client: boto3 IAM client used for every lookup
        detect_cycles: Raise CycleDetectedError when a reference is re-entered
            while still being expanded, instead of recursing without bound
    """

    def __init__(self, iam_client: IAMClient, detect_cycles: bool = True) -> None:
        self.iam_client = iam_client
        self.detect_cycles = detect_cycles

    @classmethod
    def from_session(cls, session: boto3.Session, detect_cycles: bool = True) -> "StatementResolver":
        iam_client: IAMClient = session.client("iam")
        return cls(iam_client, detect_cycles=detect_cycles)

    def resolve(self, reference: str) -> List[Statement]:
        """
        Resolve a reference into its statements.

        Args:
            reference: ARN of a managed policy, role, or assumed-role session

        Returns:
            Statements in resolution order; duplicates reached through different
            attachments are kept

        Raises:
            PolicyScopeError: If any part of the resolution fails
        """
        return self._resolve(reference, ())

    def _resolve(self, reference: str, chain: Tuple[str, ...]) -> List[Statement]:
        if self.detect_cycles and reference in chain:
            raise CycleDetectedError(reference)
        chain = chain + (reference,)

        kind = classify(reference)
        if kind is ReferenceKind.POLICY:
            return self._resolve_policy(reference)
        if kind in ROLE_KINDS:
            # An assumed-role session carries the permissions of its role
            return self._resolve_role(entity_name(reference), chain)
        raise UnsupportedReferenceKindError(f"no resolution path for {kind.value} reference {reference}")

    def _resolve_policy(self, policy_arn: str) -> List[Statement]:
        """Fetch and decode the default version of a managed policy."""
        with _identity_provider_call(policy_arn, "get_policy"):
            policy_resp = self.iam_client.get_policy(PolicyArn=policy_arn)

        version_id = policy_resp.get("Policy", {}).get("DefaultVersionId")
        if not version_id:
            raise NoDefaultVersionError(policy_arn)

        with _identity_provider_call(policy_arn, "get_policy_version"):
            version_resp = self.iam_client.get_policy_version(
                PolicyArn=policy_arn,
                VersionId=version_id
            )

        document = version_resp.get("PolicyVersion", {}).get("Document")
        if document is None:
            raise MissingDocumentError(policy_arn, version_id)

        return decode_document(document)

    def _resolve_role(self, role_name: str, chain: Tuple[str, ...]) -> List[Statement]:
        """Collect attached-policy statements followed by inline-policy statements."""
        statements = self._attached_policy_statements(role_name, chain)
        statements.extend(self._inline_policy_statements(role_name))
        return statements

    def _attached_policy_statements(self, role_name: str, chain: Tuple[str, ...]) -> List[Statement]:
        with _identity_provider_call(role_name, "list_attached_role_policies"):
            attached_resp = self.iam_client.list_attached_role_policies(RoleName=role_name)

        statements: List[Statement] = []
        for policy in attached_resp.get("AttachedPolicies", []):
            policy_arn = policy["PolicyArn"]
            policy_name = policy.get("PolicyName", policy_arn)
            try:
                statements.extend(self._resolve(policy_arn, chain))
            except PolicyScopeError as e:
                # One bad attachment fails the whole role
                raise AttachedPolicyError(policy_name, policy_arn, e) from e
        return statements

    def _inline_policy_statements(self, role_name: str) -> List[Statement]:
        with _identity_provider_call(role_name, "list_role_policies"):
            names_resp = self.iam_client.list_role_policies(RoleName=role_name)

        statements: List[Statement] = []
        for policy_name in names_resp.get("PolicyNames", []):
            try:
                policy_resp = self.iam_client.get_role_policy(
                    RoleName=role_name,
                    PolicyName=policy_name
                )
            except (ClientError, BotoCoreError) as e:
                # The policy may have been deleted since it was listed
                logger.warning(f"Skipping inline policy '{policy_name}' of role '{role_name}': {e}")
                continue

            try:
                statements.extend(decode_document(policy_resp.get("PolicyDocument")))
            except PolicyScopeError as e:
                logger.error(f"Could not parse inline policy '{policy_name}' of role '{role_name}': {e}")
                raise
        return statements
