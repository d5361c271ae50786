"""
Pydantic schemas for upstream payloads and request/response validation.
Optional upstream fields decode to None instead of failing.
"""

from typing import List, Optional
from pydantic import BaseModel, field_validator


# ============ AtCoder Problems Schemas ============

class ProblemModel(BaseModel):
    """Statistical model for one problem (problem-models.json)."""
    slope: Optional[float] = None
    intercept: Optional[float] = None
    variance: Optional[float] = None
    difficulty: Optional[int] = None
    discrimination: Optional[float] = None
    irt_loglikelihood: Optional[float] = None
    irt_users: Optional[int] = None
    is_experimental: Optional[bool] = None


class ProblemMeta(BaseModel):
    """Catalog entry for one problem (problems.json)."""
    id: str
    contest_id: str = ""
    problem_index: str = ""
    name: str = ""
    title: str = ""


class Submission(BaseModel):
    """One judge submission (v3 user/submissions)."""
    id: int
    epoch_second: int
    problem_id: str
    contest_id: Optional[str] = None
    user_id: str = ""
    language: str = ""
    point: Optional[float] = None
    length: Optional[int] = None
    result: str
    execution_time: Optional[int] = None


# ============ Persisted State ============

class ConfigRecord(BaseModel):
    """On-disk config record: {"channel": ..., "users": [...]}."""
    channel: Optional[str] = None
    users: List[str] = []

    @field_validator("channel", mode="before")
    @classmethod
    def channel_as_string(cls, value):
        # Older files stored the Discord channel id as a number
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


# ============ Command Schemas ============

class ChannelRequest(BaseModel):
    """Request body for setting the notification channel."""
    channel_id: str


class RegisterRequest(BaseModel):
    """Request body for registering users (comma separated)."""
    users: str


class ConfigResponse(BaseModel):
    """Current roster and destination."""
    channel: Optional[str] = None
    users: List[str]


class RunResponse(BaseModel):
    """Outcome of a manual digest run."""
    message: str
    accounts: int
    problems: int
    pages: int
