"""
Centralized Configuration Module for AC Digest.

All configurable constants, timeouts, URLs, and limits are defined here.
Import from this module instead of hardcoding values.
"""

import os

# =============================================================================
# ATCODER PROBLEMS API CONFIGURATION
# =============================================================================

ATCODER_PROBLEMS_BASE_URL = os.getenv(
    "ATCODER_PROBLEMS_BASE_URL", "https://kenkoooo.com/atcoder"
)
ATCODER_BASE_URL = os.getenv("ATCODER_BASE_URL", "https://atcoder.jp")
JUDGE_API_TIMEOUT = float(os.getenv("JUDGE_API_TIMEOUT", "30"))  # seconds

# AtCoder user id validation pattern
ATCODER_USER_PATTERN = r"^[a-zA-Z0-9_]{3,16}$"

# Only this verdict is ever reported
ACCEPTED_RESULT = "AC"

# =============================================================================
# DIGEST SETTINGS
# =============================================================================

LOOKBACK_SECONDS = int(os.getenv("LOOKBACK_SECONDS", str(24 * 60 * 60)))
PAGE_FIELD_LIMIT = 25  # Discord embed field ceiling
DAILY_RUN_HOUR = int(os.getenv("DAILY_RUN_HOUR", "0"))  # local time
# IANA zone name for the daily run; unset means the host's local zone
SCHEDULER_TIMEZONE = os.getenv("SCHEDULER_TIMEZONE") or None
ENABLE_SCHEDULER = os.getenv("ENABLE_SCHEDULER", "1") not in ("0", "false", "no")

# =============================================================================
# PERSISTENCE
# =============================================================================

CONFIG_PATH = os.getenv("CONFIG_PATH", "config.json")

# =============================================================================
# DISCORD CONFIGURATION
# =============================================================================

DISCORD_API_BASE = os.getenv("DISCORD_API_BASE", "https://discord.com/api/v10")
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN", "")
DISCORD_TIMEOUT = 10  # seconds
DISCORD_EMBEDS_PER_MESSAGE = 10

# =============================================================================
# API SETTINGS
# =============================================================================

API_VERSION = "v1"

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
