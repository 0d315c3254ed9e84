"""
Constants module for reference markers and defaults.
"""

# Substring markers that identify the kind of entity an ARN names.
# Reference: https://docs.aws.amazon.com/IAM/latest/UserGuide/reference-arns.html
POLICY_MARKER = ":policy/"
ROLE_MARKER = ":role/"
ASSUMED_ROLE_MARKER = ":assumed-role/"

# A reference is "<prefix>/<name>" or "<prefix>/<name>/<session>"
REFERENCE_SEPARATOR = "/"
VALID_REFERENCE_SEGMENT_COUNTS = frozenset({2, 3})
ENTITY_NAME_INDEX = 1

# Known statement effects; anything else is displayed verbatim
EFFECT_ALLOW = "Allow"
EFFECT_DENY = "Deny"

DEFAULT_REGION = "us-west-2"
DEFAULT_LOG_LEVEL = "WARNING"
ASSUMED_SESSION_NAME = "PolicyScopeSession"
