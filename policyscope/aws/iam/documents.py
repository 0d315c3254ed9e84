"""
IAM policy document decoding.

Policy documents come back from IAM as URL-encoded JSON (or, depending on the
SDK, already decoded into a dict). The Resource and Action fields may be a
single string or a list of strings; both shapes are normalized to tuples here
so nothing downstream needs to know which one was used.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, List, Tuple, Union
from urllib.parse import unquote

from ...types import PolicyDocument, RawResource, Statement
from .errors import InvalidEncodingError, MalformedDocumentError, MalformedResourceFieldError

logger = logging.getLogger(__name__)

RawDocument = Union[str, Mapping]

# A '%' not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _unescape(raw: str) -> str:
    """
    URL-path-unescape a document, rejecting malformed escape sequences.

    Raises:
        InvalidEncodingError: If an escape is truncated, non-hex, or not UTF-8
    """
    match = _MALFORMED_ESCAPE.search(raw)
    if match:
        raise InvalidEncodingError(
            f"invalid policy document: malformed escape {raw[match.start():match.start() + 3]!r}"
        )
    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidEncodingError(f"invalid policy document: {e}") from e


def _load(raw: RawDocument) -> Mapping:
    if isinstance(raw, Mapping):
        return raw
    if not isinstance(raw, str):
        raise MalformedDocumentError(
            f"decoding document: expected a string or object, got {type(raw).__name__}"
        )

    text = _unescape(raw)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"decoding document: {e}") from e

    if not isinstance(document, Mapping):
        raise MalformedDocumentError(
            f"decoding document: expected a JSON object, got {type(document).__name__}"
        )
    return document


def _normalize_resource(raw: RawResource) -> Tuple[str, ...]:
    """
    Normalize a Resource field to a tuple of ARNs.

    Tries the list shape first, then the single-string shape.

    Args:
        raw: Resource field from a policy statement (string or list of strings)

    Returns:
        Tuple of resource identifiers

    Raises:
        MalformedResourceFieldError: If the value is neither shape
    """
    if raw is None:
        return ()
    if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        return tuple(raw)
    if isinstance(raw, str):
        return (raw,)
    raise MalformedResourceFieldError(
        f"unmarshalling resources: expected string or list of strings, got {raw!r}"
    )


def _normalize_action(raw: Any) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        return tuple(raw)
    raise MalformedDocumentError(f"decoding document: invalid Action {raw!r}")


def _parse_statement(raw: Any) -> Statement:
    if not isinstance(raw, Mapping):
        raise MalformedDocumentError(f"decoding document: statement is not an object: {raw!r}")

    effect = raw.get("Effect", "")
    if not isinstance(effect, str):
        raise MalformedDocumentError(f"decoding document: invalid Effect {effect!r}")

    return Statement(
        action=_normalize_action(raw.get("Action")),
        resource=_normalize_resource(raw.get("Resource")),
        effect=effect,
    )


def parse_policy_document(raw: RawDocument) -> PolicyDocument:
    """
    Parse a raw policy document.

    Args:
        raw: URL-encoded JSON policy document, or an already-decoded dict

    Returns:
        PolicyDocument with normalized statements

    Raises:
        InvalidEncodingError: If URL unescaping fails
        MalformedDocumentError: If the JSON structure is not a policy document
        MalformedResourceFieldError: If a Resource field has an unsupported shape
    """
    document = _load(raw)

    version = document.get("Version", "")
    if not isinstance(version, str):
        raise MalformedDocumentError(f"decoding document: invalid Version {version!r}")

    raw_statements = document.get("Statement")
    if raw_statements is None:
        raw_statements = []
    elif isinstance(raw_statements, Mapping):
        raw_statements = [raw_statements]
    elif not isinstance(raw_statements, list):
        raise MalformedDocumentError(
            f"decoding document: invalid Statement {raw_statements!r}"
        )

    statements = tuple(_parse_statement(statement) for statement in raw_statements)
    logger.debug(f"Decoded policy document version '{version}' with {len(statements)} statement(s)")
    return PolicyDocument(version=version, statements=statements)


def decode_document(raw: RawDocument) -> List[Statement]:
    """
    Decode a raw policy document into its statements.

    Args:
        raw: URL-encoded JSON policy document, or an already-decoded dict

    Returns:
        Statements in document order
    """
    return list(parse_policy_document(raw).statements)
