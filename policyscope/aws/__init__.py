"""AWS integration library for PolicyScope statement resolution."""

from .iam import (
    PolicyScopeError,
    StatementResolver,
)
from .sessions import build_session

__all__ = [
    "PolicyScopeError",
    "StatementResolver",
    "build_session",
]
