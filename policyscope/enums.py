"""
Enumerations for PolicyScope.

This module contains the enum types used to replace magic strings
when dispatching on IAM references.
"""

from enum import Enum


class ReferenceKind(str, Enum):
    """Kinds of entity an IAM reference can name."""
    POLICY = "policy"
    ROLE = "role"
    ASSUMED_ROLE = "assumed-role"


class OutputFormat(str, Enum):
    """Formats the resolved statements can be rendered in."""
    TEXT = "text"
    JSON = "json"
