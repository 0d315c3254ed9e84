"""
AWS IAM statement resolution.

This module provides:
- Reference classification (policy, role, assumed-role)
- Policy document decoding
- Recursive statement resolution for roles and managed policies
"""

from .documents import (
    decode_document,
    parse_policy_document,
)
from .errors import (
    AttachedPolicyError,
    CycleDetectedError,
    IdentityProviderError,
    InvalidEncodingError,
    MalformedDocumentError,
    MalformedReferenceError,
    MalformedResourceFieldError,
    MissingDocumentError,
    NoDefaultVersionError,
    PolicyScopeError,
    UnsupportedReferenceKindError,
)
from .references import (
    classify,
    entity_name,
)
from .resolver import StatementResolver

__all__ = [
    # Documents
    "decode_document",
    "parse_policy_document",
    # References
    "classify",
    "entity_name",
    # Resolution
    "StatementResolver",
    # Errors
    "PolicyScopeError",
    "MalformedReferenceError",
    "UnsupportedReferenceKindError",
    "InvalidEncodingError",
    "MalformedDocumentError",
    "MalformedResourceFieldError",
    "NoDefaultVersionError",
    "MissingDocumentError",
    "CycleDetectedError",
    "IdentityProviderError",
    "AttachedPolicyError",
]
