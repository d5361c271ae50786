"""
Notification Batching Module for AC Digest.

Turns per-account pipeline results into embed-sized pages.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .config import ATCODER_BASE_URL, PAGE_FIELD_LIMIT
from .difficulty import Color, format_difficulty, summary_color
from .pipeline import AccountResult, ProblemDetail

NOBODY_SOLVED_MESSAGE = "Nobody got an AC yesterday."


@dataclass
class NotificationPage:
    """One rich message block: at most PAGE_FIELD_LIMIT fields."""
    title: str
    url: str
    color: Color
    fields: List[Tuple[str, str]] = field(default_factory=list)


def format_field(detail: ProblemDetail) -> Tuple[str, str]:
    """Render one problem as a (name, value) embed field."""
    value = " | ".join([
        format_difficulty(detail.difficulty),
        detail.language,
        f"[submission]({detail.submission_url})",
    ])
    return detail.title, value


def batch(account: str, details: List[ProblemDetail]) -> List[NotificationPage]:
    """
    Split one account's solved problems into pages.

    Args:
        account: AtCoder user id
        details: Solved problems in display order

    Returns:
        Consecutive pages of at most PAGE_FIELD_LIMIT entries, order kept.
        Empty when nothing was solved.
    """
    pages = []
    for start in range(0, len(details), PAGE_FIELD_LIMIT):
        chunk = details[start:start + PAGE_FIELD_LIMIT]
        pages.append(NotificationPage(
            title=f"Problems {account} solved yesterday",
            url=f"{ATCODER_BASE_URL}/users/{account}",
            color=summary_color(d.color for d in chunk),
            fields=[format_field(d) for d in chunk],
        ))
    return pages


def build_pages(results: List[AccountResult]) -> List[NotificationPage]:
    """All pages of a run, accounts in result order."""
    pages = []
    for account, details in results:
        pages.extend(batch(account, details))
    return pages
