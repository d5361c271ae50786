"""
Submission Diff Pipeline for AC Digest.

For every watched account, finds the problems accepted in the lookback
window and joins them against the problem catalog and difficulty models.

Design Principles:
- Catalog-wide data is fetched once per run, never per account
- One representative submission per solved problem
- Missing catalog or model data degrades the entry, never the run
- Any upstream failure aborts the whole run
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .config import ACCEPTED_RESULT, ATCODER_BASE_URL, LOOKBACK_SECONDS
from .difficulty import Color, color_for_raw, normalize_difficulty
from .errors import NotConfiguredError
from .judge_client import JudgeClient
from .schemas import ProblemMeta, ProblemModel, Submission
from .store import Config, ConfigStore

logger = logging.getLogger(__name__)


@dataclass
class ProblemDetail:
    """One accepted problem, ready for display."""
    problem_id: str
    title: str
    difficulty: Optional[int]  # normalized; None when no model exists
    color: Color
    language: str
    submission_url: str


AccountResult = Tuple[str, List[ProblemDetail]]


def submission_url(contest_id: str, submission_id: int) -> str:
    return f"{ATCODER_BASE_URL}/contests/{contest_id}/submissions/{submission_id}"


def collect_solved(submissions: List[Submission], since: int) -> List[Submission]:
    """
    Keep the first accepted in-window submission of each problem.

    Args:
        submissions: Raw submissions for one account
        since: Epoch seconds lower bound of the window

    Returns:
        One submission per distinct problem, in first-seen order
    """
    seen = set()
    solved = []
    for sub in submissions:
        if sub.result != ACCEPTED_RESULT or sub.epoch_second < since:
            continue
        if sub.problem_id in seen:
            continue
        seen.add(sub.problem_id)
        solved.append(sub)
    return solved


def build_detail(
    submission: Submission,
    catalog: Dict[str, ProblemMeta],
    models: Dict[str, ProblemModel],
) -> ProblemDetail:
    """Join one representative submission against catalog and model data."""
    meta = catalog.get(submission.problem_id)
    model = models.get(submission.problem_id)

    if meta is None:
        logger.warning(f"Problem {submission.problem_id} missing from catalog")
    title = meta.title if meta and meta.title else submission.problem_id
    if meta and meta.contest_id:
        contest_id = meta.contest_id
    else:
        contest_id = submission.contest_id or ""

    raw = model.difficulty if model else None
    return ProblemDetail(
        problem_id=submission.problem_id,
        title=title,
        difficulty=normalize_difficulty(raw) if raw is not None else None,
        color=color_for_raw(raw),
        language=submission.language,
        submission_url=submission_url(contest_id, submission.id),
    )


def run_pipeline(
    store: ConfigStore,
    client: JudgeClient,
    now: Optional[float] = None,
    config: Optional[Config] = None,
) -> List[AccountResult]:
    """
    Compute newly accepted problems for every watched account.

    Args:
        store: Source of the roster and destination
        client: AtCoder Problems client
        now: Epoch seconds to treat as the current time (defaults to now)
        config: Snapshot to run against; taken from the store when omitted

    Returns:
        (account, details) per account in sorted roster order; accounts
        with nothing solved get an empty list

    Raises:
        NotConfiguredError: No destination channel is set
        UpstreamError: Any fetch failed
    """
    if config is None:
        config = store.snapshot()
    if config.channel is None:
        raise NotConfiguredError()

    now = time.time() if now is None else now
    since = int(now) - LOOKBACK_SECONDS

    models = client.fetch_problem_models()
    catalog = {p.id: p for p in client.fetch_problem_catalog()}

    results: List[AccountResult] = []
    for user in sorted(config.users):
        logger.info(f"Processing user: {user}")
        submissions = client.fetch_user_submissions(user, since)
        solved = collect_solved(submissions, since)
        details = [build_detail(sub, catalog, models) for sub in solved]
        logger.info(f"{user} solved {len(details)} problems since {since}")
        results.append((user, details))

    return results
