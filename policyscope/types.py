"""
Shared data types for PolicyScope.

This module contains the value objects produced while resolving an IAM
reference. They are built fresh for every resolution and never shared.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union


RawResource = Union[str, List[str]]
"""Wire shape of a statement's Resource field: a single ARN or a list of ARNs."""

JsonDict = Dict[str, object]
"""Type for JSON-serializable dictionaries with runtime-typed values."""


@dataclass(frozen=True)
class Statement:
    """
    One permission entry of a policy document.

    Attributes:
        action: Action identifiers in document order
        resource: Resource identifiers, always a sequence regardless of wire shape
        effect: "Allow", "Deny", or any other value passed through verbatim
    """
    action: Tuple[str, ...]
    resource: Tuple[str, ...]
    effect: str

    def to_dict(self) -> JsonDict:
        """Return the statement keyed the way IAM documents key it."""
        return {
            "Effect": self.effect,
            "Action": list(self.action),
            "Resource": list(self.resource),
        }


@dataclass(frozen=True)
class PolicyDocument:
    """A decoded policy document."""
    version: str
    statements: Tuple[Statement, ...]
