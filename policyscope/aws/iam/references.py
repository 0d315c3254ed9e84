"""
IAM reference classification.

A reference is an ARN naming a managed policy, a role, or an assumed-role
session. Classification is done once here so the resolver can dispatch on
ReferenceKind instead of searching strings again.
"""

from ...constants import (
    ASSUMED_ROLE_MARKER,
    ENTITY_NAME_INDEX,
    POLICY_MARKER,
    REFERENCE_SEPARATOR,
    ROLE_MARKER,
    VALID_REFERENCE_SEGMENT_COUNTS,
)
from ...enums import ReferenceKind
from .errors import MalformedReferenceError

# Checked in order; the first marker found wins
_KIND_MARKERS = (
    (POLICY_MARKER, ReferenceKind.POLICY),
    (ROLE_MARKER, ReferenceKind.ROLE),
    (ASSUMED_ROLE_MARKER, ReferenceKind.ASSUMED_ROLE),
)

# References carrying no known marker are treated as roles
FALLBACK_KIND = ReferenceKind.ROLE


def classify(reference: str) -> ReferenceKind:
    """
    Determine which kind of entity a reference names.

    Args:
        reference: ARN of a managed policy, role, or assumed-role session

    Returns:
        The matching ReferenceKind, or FALLBACK_KIND when no marker is present
    """
    for marker, kind in _KIND_MARKERS:
        if marker in reference:
            return kind
    return FALLBACK_KIND


def entity_name(reference: str) -> str:
    """
    Extract the entity name (second '/'-delimited segment) from a reference.

    The session segment of an assumed-role ARN is discarded, so
    "arn:aws:sts::123:assumed-role/Admin/alice" yields "Admin".

    Args:
        reference: ARN with 2 or 3 '/'-delimited segments

    Returns:
        The entity name

    Raises:
        MalformedReferenceError: If the reference has any other segment count
    """
    parts = reference.split(REFERENCE_SEPARATOR)
    if len(parts) not in VALID_REFERENCE_SEGMENT_COUNTS:
        raise MalformedReferenceError(reference)
    return parts[ENTITY_NAME_INDEX]
