"""
Unit Tests for the AtCoder Problems Client.
"""

from unittest.mock import Mock

import pytest
import requests
from acdigest.errors import UpstreamError
from acdigest.judge_client import JudgeClient


def make_response(payload=None, status=200, bad_json=False):
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    if bad_json:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    mock_session = Mock()
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def client(session):
    return JudgeClient(base_url="https://example.test/atcoder/", timeout=5, session=session)


class TestRequests:
    """Tests for request construction."""

    def test_gzip_header_set(self, client, session):
        assert session.headers["Accept-Encoding"] == "gzip"

    def test_submissions_query(self, client, session):
        session.get.return_value = make_response([])
        client.fetch_user_submissions("alice", 1699913600)

        session.get.assert_called_once_with(
            "https://example.test/atcoder/atcoder-api/v3/user/submissions",
            params={"user": "alice", "from_second": 1699913600},
            timeout=5,
        )


class TestDecoding:
    """Tests for payload decoding."""

    def test_problem_models_optional_fields(self, client, session):
        """Absent optional fields decode to None."""
        session.get.return_value = make_response({
            "abc300_a": {"slope": -0.0007, "intercept": 8.2, "variance": 0.1,
                         "difficulty": -1059, "discrimination": 0.004,
                         "irt_loglikelihood": -1.2, "irt_users": 10000,
                         "is_experimental": False},
            "practice_1": {},
        })
        models = client.fetch_problem_models()

        assert models["abc300_a"].difficulty == -1059
        assert models["abc300_a"].is_experimental is False
        assert models["practice_1"].difficulty is None

    def test_problem_catalog(self, client, session):
        session.get.return_value = make_response([
            {"id": "abc300_a", "contest_id": "abc300", "problem_index": "A",
             "name": "N-choice question", "title": "A. N-choice question"},
        ])
        problems = client.fetch_problem_catalog()

        assert len(problems) == 1
        assert problems[0].title == "A. N-choice question"

    def test_submissions(self, client, session):
        session.get.return_value = make_response([
            {"id": 41000000, "epoch_second": 1699990000, "problem_id": "abc300_a",
             "contest_id": "abc300", "user_id": "alice", "language": "C++ 20 (gcc 12.2)",
             "point": 100.0, "length": 300, "result": "AC", "execution_time": None},
        ])
        submissions = client.fetch_user_submissions("alice", 1699913600)

        assert submissions[0].id == 41000000
        assert submissions[0].result == "AC"
        assert submissions[0].execution_time is None


class TestFailures:
    """Every failure surfaces as UpstreamError."""

    def test_non_2xx_status(self, client, session):
        session.get.return_value = make_response(status=503)
        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_problem_models()
        assert "503" in exc_info.value.message

    def test_invalid_json(self, client, session):
        session.get.return_value = make_response(bad_json=True)
        with pytest.raises(UpstreamError):
            client.fetch_problem_catalog()

    def test_wrong_payload_shape(self, client, session):
        session.get.return_value = make_response({"not": "a list"})
        with pytest.raises(UpstreamError):
            client.fetch_problem_catalog()

    def test_missing_required_field(self, client, session):
        session.get.return_value = make_response([{"id": 1, "problem_id": "abc300_a"}])
        with pytest.raises(UpstreamError):
            client.fetch_user_submissions("alice", 0)

    def test_timeout(self, client, session):
        session.get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_problem_models()
        assert "timeout" in exc_info.value.message.lower()

    def test_connection_error(self, client, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(UpstreamError):
            client.fetch_user_submissions("alice", 0)
