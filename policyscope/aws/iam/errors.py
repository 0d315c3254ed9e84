"""
Errors raised while resolving IAM references into statements.

Every failure aborts the whole resolution and surfaces to the caller as a
PolicyScopeError subclass.
"""

from typing import Optional, Union

from botocore.exceptions import BotoCoreError, ClientError


class PolicyScopeError(Exception):
    """Base class for all resolution failures."""


class MalformedReferenceError(PolicyScopeError):
    """Raised when a reference does not split into 2 or 3 '/'-delimited segments."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"invalid arn format: {reference}")
        self.reference = reference


class UnsupportedReferenceKindError(PolicyScopeError):
    """Raised when a reference kind has no resolution path."""


class InvalidEncodingError(PolicyScopeError):
    """Raised when a policy document contains a malformed escape sequence."""


class MalformedDocumentError(PolicyScopeError):
    """Raised when a policy document does not have the expected structure."""


class MalformedResourceFieldError(MalformedDocumentError):
    """Raised when a statement's Resource is neither a string nor a list of strings."""


class NoDefaultVersionError(PolicyScopeError):
    """Raised when managed policy metadata carries no default version id."""

    def __init__(self, policy_arn: str) -> None:
        super().__init__(f"could not get default policy version for {policy_arn}")
        self.policy_arn = policy_arn


class MissingDocumentError(PolicyScopeError):
    """Raised when a policy version is returned without a document body."""

    def __init__(self, policy_arn: str, version_id: str) -> None:
        super().__init__(f"no document found for {policy_arn} version {version_id}")
        self.policy_arn = policy_arn
        self.version_id = version_id


class CycleDetectedError(PolicyScopeError):
    """Raised when a reference is re-entered while it is still being expanded."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"reference {reference} is attached to itself")
        self.reference = reference


class IdentityProviderError(PolicyScopeError):
    """
    Raised when an IAM API call fails.

    Wraps the botocore error (available as __cause__), either an API error
    response (ClientError) or a transport failure (BotoCoreError), and records
    the entity being resolved and the operation that failed.
    """

    def __init__(self, entity: str, operation: str, error: Union[ClientError, BotoCoreError]) -> None:
        super().__init__(f"{operation} for {entity}: {error}")
        self.entity = entity
        self.operation = operation
        self.error = error

    @property
    def error_code(self) -> Optional[str]:
        """AWS error code of the underlying failure (e.g. AccessDenied), None for transport errors."""
        if not isinstance(self.error, ClientError):
            return None
        return self.error.response.get("Error", {}).get("Code")


class AttachedPolicyError(PolicyScopeError):
    """Raised when one attached managed policy of a role cannot be resolved."""

    def __init__(self, policy_name: str, policy_arn: str, error: Exception) -> None:
        super().__init__(f"fetching policy statements for {policy_name}: {error}")
        self.policy_name = policy_name
        self.policy_arn = policy_arn
