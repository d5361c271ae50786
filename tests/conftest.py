"""
Test Configuration and Fixtures for AC Digest.
"""

import pytest
import sys
import os

# Add repo root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from acdigest.errors import UpstreamError
from acdigest.notifier import Notifier
from acdigest.schemas import ProblemMeta, ProblemModel, Submission
from acdigest.store import ConfigStore

NOW = 1700000000


class FakeJudgeClient:
    """In-memory stand-in for JudgeClient that records calls."""

    def __init__(self, models=None, problems=None, submissions=None, failing_users=()):
        self.models = models or {}
        self.problems = problems or []
        self.submissions = submissions or {}
        self.failing_users = set(failing_users)
        self.calls = []

    def fetch_problem_models(self):
        self.calls.append("models")
        return dict(self.models)

    def fetch_problem_catalog(self):
        self.calls.append("catalog")
        return list(self.problems)

    def fetch_user_submissions(self, user, since):
        self.calls.append(("submissions", user, since))
        if user in self.failing_users:
            raise UpstreamError(f"boom for {user}")
        return list(self.submissions.get(user, []))


class RecordingNotifier(Notifier):
    """Notifier that keeps everything it was asked to send."""

    def __init__(self):
        self.texts = []
        self.page_batches = []

    def send_text(self, channel, text):
        self.texts.append((channel, text))

    def send_pages(self, channel, pages):
        self.page_batches.append((channel, list(pages)))


def make_submission(sub_id, problem_id, epoch_second=NOW - 3600, result="AC",
                    user="alice", language="C++ 20 (gcc 12.2)", contest_id="abc300"):
    return Submission(
        id=sub_id,
        epoch_second=epoch_second,
        problem_id=problem_id,
        contest_id=contest_id,
        user_id=user,
        language=language,
        point=100.0,
        length=512,
        result=result,
        execution_time=3,
    )


@pytest.fixture
def config_path(tmp_path):
    """Path of a not-yet-existing config file."""
    return str(tmp_path / "config.json")


@pytest.fixture
def store(config_path):
    """Empty store backed by a temp file."""
    return ConfigStore(config_path)


@pytest.fixture
def configured_store(store):
    """Store with a channel and no users."""
    store.set_channel("123456789")
    return store


@pytest.fixture
def alice_client():
    """
    alice solved three problems (difficulties 350, 1650, 2900) in the
    window, solved the 1650 problem twice, and has one WA and one
    out-of-window AC.
    """
    models = {
        "abc300_a": ProblemModel(difficulty=350, is_experimental=False),
        "abc300_e": ProblemModel(difficulty=1650),
        "abc300_g": ProblemModel(difficulty=2900),
        "abc300_b": ProblemModel(difficulty=800),
    }
    problems = [
        ProblemMeta(id="abc300_a", contest_id="abc300", problem_index="A",
                    name="N-choice question", title="A. N-choice question"),
        ProblemMeta(id="abc300_b", contest_id="abc300", problem_index="B",
                    name="Same Map in the RPG World", title="B. Same Map in the RPG World"),
        ProblemMeta(id="abc300_e", contest_id="abc300", problem_index="E",
                    name="Dice Product 3", title="E. Dice Product 3"),
        ProblemMeta(id="abc300_g", contest_id="abc300", problem_index="G",
                    name="P-smooth number", title="G. P-smooth number"),
    ]
    submissions = {
        "alice": [
            make_submission(1, "abc300_a"),
            make_submission(2, "abc300_e"),
            make_submission(3, "abc300_b", result="WA"),
            make_submission(4, "abc300_e", language="Python (CPython 3.11.4)"),
            make_submission(5, "abc300_g"),
            make_submission(6, "abc300_b", epoch_second=NOW - 2 * 86400),
        ],
    }
    return FakeJudgeClient(models=models, problems=problems, submissions=submissions)


@pytest.fixture
def notifier():
    return RecordingNotifier()
