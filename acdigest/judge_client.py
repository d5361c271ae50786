"""
AtCoder Problems API Client Module.

Handles all communication with the AtCoder Problems data endpoints:
- Difficulty models for every problem
- The global problem catalog
- Per-user submission history since a point in time

Failures are never retried here; the caller decides what a failed run means.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from .config import ATCODER_PROBLEMS_BASE_URL, JUDGE_API_TIMEOUT
from .errors import UpstreamError
from .schemas import ProblemMeta, ProblemModel, Submission

logger = logging.getLogger(__name__)

PROBLEM_MODELS_PATH = "/resources/problem-models.json"
PROBLEMS_PATH = "/resources/problems.json"
USER_SUBMISSIONS_PATH = "/atcoder-api/v3/user/submissions"

DEFAULT_HEADERS = {"Accept-Encoding": "gzip"}


class JudgeClient:
    """Read-only client for the AtCoder Problems JSON endpoints."""

    def __init__(
        self,
        base_url: str = ATCODER_PROBLEMS_BASE_URL,
        timeout: float = JUDGE_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def _get_json(self, path: str, params: Dict = None) -> Any:
        """
        GET an endpoint and decode its JSON body.

        Args:
            path: Endpoint path relative to the base URL
            params: Optional query parameters

        Returns:
            Decoded JSON payload

        Raises:
            UpstreamError: On transport failure, non-2xx status or bad JSON
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.warning(f"AtCoder Problems timeout: {url}")
            raise UpstreamError("AtCoder Problems API timeout", url)
        except requests.exceptions.RequestException as e:
            logger.warning(f"AtCoder Problems request failed: {e}")
            raise UpstreamError("AtCoder Problems API request failed", str(e))

        if not response.ok:
            logger.warning(f"AtCoder Problems returned HTTP {response.status_code} for {url}")
            raise UpstreamError(
                f"AtCoder Problems API returned HTTP {response.status_code}",
                url
            )

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Undecodable payload from {url}: {e}")
            raise UpstreamError("AtCoder Problems API returned invalid JSON", url)

    def fetch_problem_models(self) -> Dict[str, ProblemModel]:
        """Fetch the difficulty model of every problem, keyed by problem id."""
        logger.info("Fetching problem models from AtCoder Problems...")
        data = self._get_json(PROBLEM_MODELS_PATH)
        if not isinstance(data, dict):
            raise UpstreamError("Unexpected problem models payload", type(data).__name__)

        try:
            models = {pid: ProblemModel.model_validate(raw) for pid, raw in data.items()}
        except PydanticValidationError as e:
            raise UpstreamError("Malformed problem model entry", str(e))

        logger.info(f"Fetched {len(models)} problem models")
        return models

    def fetch_problem_catalog(self) -> List[ProblemMeta]:
        """Fetch the catalog of all problems."""
        logger.info("Fetching problem catalog from AtCoder Problems...")
        data = self._get_json(PROBLEMS_PATH)
        if not isinstance(data, list):
            raise UpstreamError("Unexpected problem catalog payload", type(data).__name__)

        try:
            problems = [ProblemMeta.model_validate(raw) for raw in data]
        except PydanticValidationError as e:
            raise UpstreamError("Malformed problem catalog entry", str(e))

        logger.info(f"Fetched {len(problems)} problems")
        return problems

    def fetch_user_submissions(self, user: str, since: int) -> List[Submission]:
        """
        Fetch a user's submissions made at or after a point in time.

        Args:
            user: AtCoder user id
            since: Epoch seconds lower bound (from_second)

        Returns:
            Submissions in the order the API returns them
        """
        logger.info(f"Fetching submissions for {user} since {since}")
        data = self._get_json(
            USER_SUBMISSIONS_PATH,
            {"user": user, "from_second": since}
        )
        if not isinstance(data, list):
            raise UpstreamError(f"Unexpected submissions payload for {user}", type(data).__name__)

        try:
            submissions = [Submission.model_validate(raw) for raw in data]
        except PydanticValidationError as e:
            raise UpstreamError(f"Malformed submission for {user}", str(e))

        logger.info(f"Fetched {len(submissions)} submissions for {user}")
        return submissions
