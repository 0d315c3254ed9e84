"""
Tests for policyscope.aws.sessions module.

Tests for AWS session construction and role assumption utilities.
"""

import pytest
from botocore.exceptions import ClientError
from unittest.mock import MagicMock, patch
from policyscope.aws.sessions import assume_role, build_session
from policyscope.config import PolicyScopeConfig


class TestAssumeRole:
    """Test assume_role function."""

    def test_assume_role_success(self) -> None:
        """Test successful role assumption."""
        mock_base_session = MagicMock()
        mock_sts_client = MagicMock()
        mock_base_session.client.return_value = mock_sts_client

        mock_sts_client.assume_role.return_value = {
            "Credentials": {
                "AccessKeyId": "FAKE_ACCESS_KEY_ID",
                "SecretAccessKey": "FAKE_SECRET_ACCESS_KEY",
                "SessionToken": "FAKE_SESSION_TOKEN"
            }
        }

        with patch("policyscope.aws.sessions.Session") as mock_session_class:
            mock_new_session = MagicMock()
            mock_session_class.return_value = mock_new_session

            result = assume_role(
                role_arn="arn:aws:iam::123456789012:role/AuditRole",
                session_name="TestSession",
                base_session=mock_base_session,
                region_name="eu-west-1"
            )

            mock_base_session.client.assert_called_once_with("sts")
            mock_sts_client.assume_role.assert_called_once_with(
                RoleArn="arn:aws:iam::123456789012:role/AuditRole",
                RoleSessionName="TestSession"
            )
            mock_session_class.assert_called_once_with(
                aws_access_key_id="FAKE_ACCESS_KEY_ID",
                aws_secret_access_key="FAKE_SECRET_ACCESS_KEY",
                aws_session_token="FAKE_SESSION_TOKEN",
                region_name="eu-west-1"
            )

            assert result is mock_new_session

    def test_assume_role_client_error(self) -> None:
        """Test role assumption failure propagates."""
        mock_base_session = MagicMock()
        mock_base_session.client.return_value.assume_role.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access denied"}},
            "AssumeRole"
        )

        with pytest.raises(ClientError):
            assume_role("arn:aws:iam::123456789012:role/AuditRole", "TestSession", mock_base_session)


class TestBuildSession:
    """Test build_session function."""

    def test_profile_and_region(self) -> None:
        """Test session uses configured profile and region without assuming a role."""
        config = PolicyScopeConfig(arn="arn:aws:iam::123:role/Example", profile="audit", region="eu-central-1")

        with patch("policyscope.aws.sessions.Session") as mock_session_class:
            result = build_session(config)

        mock_session_class.assert_called_once_with(profile_name="audit", region_name="eu-central-1")
        assert result is mock_session_class.return_value

    def test_default_region(self) -> None:
        """Test default region is us-west-2."""
        config = PolicyScopeConfig(arn="arn:aws:iam::123:role/Example")

        with patch("policyscope.aws.sessions.Session") as mock_session_class:
            build_session(config)

        mock_session_class.assert_called_once_with(profile_name=None, region_name="us-west-2")

    def test_assume_role_arn(self) -> None:
        """Test configured role is assumed from the base session."""
        config = PolicyScopeConfig(
            arn="arn:aws:iam::123:role/Example",
            assume_role_arn="arn:aws:iam::999:role/Auditor"
        )

        with patch("policyscope.aws.sessions.Session") as mock_session_class, \
                patch("policyscope.aws.sessions.assume_role") as mock_assume_role:
            result = build_session(config)

        mock_assume_role.assert_called_once_with(
            "arn:aws:iam::999:role/Auditor",
            "PolicyScopeSession",
            base_session=mock_session_class.return_value,
            region_name="us-west-2"
        )
        assert result is mock_assume_role.return_value
