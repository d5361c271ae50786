"""
Unit Tests for Input Validation.
"""

import pytest
from acdigest.validation import (
    validate_user_id,
    validate_channel_id,
    sanitize_user,
    split_user_list,
)


class TestUserIdValidation:
    """Tests for AtCoder user id validation."""

    def test_valid_user_ids(self):
        """Test various valid user id formats."""
        valid_users = ["tourist", "chokudai", "user_123", "abc"]

        for user in valid_users:
            is_valid, error = validate_user_id(user)
            assert is_valid, f"User '{user}' should be valid, got error: {error}"

    def test_empty_user(self):
        is_valid, error = validate_user_id("")
        assert not is_valid
        assert "empty" in error.lower()

    def test_user_too_short(self):
        is_valid, error = validate_user_id("ab")
        assert not is_valid
        assert "3" in error

    def test_user_too_long(self):
        is_valid, error = validate_user_id("a" * 17)
        assert not is_valid
        assert "16" in error

    def test_invalid_characters(self):
        """User ids with symbols or spaces are invalid."""
        for user in ["user-name", "user name", "user.name", "user@123"]:
            is_valid, _ = validate_user_id(user)
            assert not is_valid, f"User '{user}' should be invalid"


class TestChannelValidation:
    """Tests for channel id validation."""

    def test_snowflake(self):
        assert validate_channel_id("1121061974944518244") == (True, None)

    @pytest.mark.parametrize("channel", ["", "  ", "general", "12ab"])
    def test_invalid(self, channel):
        is_valid, _ = validate_channel_id(channel)
        assert not is_valid


class TestSplitting:
    """Tests for comma-separated command input."""

    def test_split_and_trim(self):
        assert split_user_list(" alice, bob ,carol ") == ["alice", "bob", "carol"]

    def test_blank_entries_dropped(self):
        assert split_user_list("alice,,bob,") == ["alice", "bob"]

    def test_none_and_empty(self):
        assert split_user_list("") == []
        assert split_user_list(None) == []

    def test_sanitize_user(self):
        assert sanitize_user("  tourist\n") == "tourist"
        assert sanitize_user(None) == ""
