"""Tests for authentication helpers."""

from __future__ import annotations

import os
from unittest.mock import patch

from stackr.auth import build_headers, get_token
from stackr.constants import USER_AGENT


class TestGetToken:
    """Tests for get_token function."""

    def test_explicit_token(self):
        """Test that explicit token takes priority."""
        with patch.dict(os.environ, {"STACKR_TOKEN": "sk_env"}):
            assert get_token("sk_explicit") == "sk_explicit"

    def test_env_var(self):
        """Test reading token from environment variable."""
        with patch.dict(os.environ, {"STACKR_TOKEN": "sk_env"}):
            assert get_token() == "sk_env"

    def test_custom_env_var(self):
        """Test reading token from a custom environment variable."""
        with patch.dict(os.environ, {"MY_STACKR_KEY": "sk_custom"}, clear=True):
            assert get_token(env_var="MY_STACKR_KEY") == "sk_custom"

    def test_no_token(self):
        """Test that None is returned when nothing is set."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_token() is None

    def test_empty_env_var(self):
        """Test that an empty environment variable counts as unset."""
        with patch.dict(os.environ, {"STACKR_TOKEN": ""}):
            assert get_token() is None


class TestBuildHeaders:
    """Tests for build_headers function."""

    def test_headers(self):
        """Test the headers sent with every request."""
        assert build_headers("sk_live_123") == {
            "Authorization": "Bearer sk_live_123",
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
