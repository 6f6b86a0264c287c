from datetime import datetime, timedelta, timezone

import pytest

from leitner.domain.models import AnswerDifficulty, PracticeRecord
from leitner.infrastructure.adapters.memory_store import InMemoryStudyStateRepository

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_record():
    """Build a PracticeRecord dated `days_ago` days before NOW."""

    def _make(card_id: str, days_ago: float, difficulty: AnswerDifficulty, bucket: int):
        return PracticeRecord(card_id, NOW - timedelta(days=days_ago), difficulty, bucket)

    return _make


@pytest.fixture
def bucket_map():
    return {"card1": 0, "card2": 1, "card3": 1, "card4": 2}


@pytest.fixture
def repo(bucket_map):
    return InMemoryStudyStateRepository(bucket_map)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "LEITNER_RETIRED_BUCKET",
        "LEITNER_STATE_FILE",
        "LEITNER_START_DAY",
        "LEITNER_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
