"""
Input Validation Utilities for AC Digest.

Provides validation functions for command input with consistent error handling.
"""

import re
from typing import List, Optional, Tuple
from .config import ATCODER_USER_PATTERN


def validate_user_id(user: str) -> Tuple[bool, Optional[str]]:
    """
    Validate AtCoder user id format.

    Args:
        user: The user id to validate

    Returns:
        Tuple of (is_valid, error_message)
        If valid, returns (True, None)
        If invalid, returns (False, "error description")
    """
    if not user:
        return False, "User id cannot be empty"

    user = user.strip()

    if len(user) < 3:
        return False, "User id must be at least 3 characters"

    if len(user) > 16:
        return False, "User id must be at most 16 characters"

    if not re.match(ATCODER_USER_PATTERN, user):
        return False, "User id can only contain letters, numbers, and underscores"

    return True, None


def validate_channel_id(channel: str) -> Tuple[bool, Optional[str]]:
    """Channel ids are Discord snowflakes: decimal digits only."""
    if not channel or not channel.strip():
        return False, "Channel id cannot be empty"
    if not channel.strip().isdigit():
        return False, "Channel id must be numeric"
    return True, None


def sanitize_user(user: str) -> str:
    """Strip whitespace from a user id."""
    return user.strip() if user else ""


def split_user_list(users: str) -> List[str]:
    """
    Split comma-separated command input into sanitized user ids.

    Blank entries (e.g. from "a,,b" or a trailing comma) are dropped.
    """
    if not users:
        return []
    return [u for u in (sanitize_user(part) for part in users.split(",")) if u]
