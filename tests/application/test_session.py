"""Tests for the day-by-day study session."""

import logging

import pytest

from leitner.application.session import StudySession
from leitner.domain.errors import InvalidInputError
from leitner.domain.models import AnswerDifficulty
from leitner.infrastructure.adapters.memory_store import InMemoryStudyStateRepository


@pytest.fixture
def session(repo, now):
    return StudySession(repo, day=1, clock=lambda: now)


class TestStudySession:
    def test_day_one_due_cards(self, session):
        assert session.due_cards == ["card1"]
        assert session.current_card == "card1"
        assert not session.is_complete

    def test_answer_updates_bucket_and_history(self, session, repo, now):
        record = session.answer(AnswerDifficulty.EASY)

        assert record.card_id == "card1"
        assert record.bucket == 1
        assert record.date == now
        assert record.difficulty is AnswerDifficulty.EASY
        assert repo.get_bucket_map()["card1"] == 1
        assert repo.get_history() == [record]
        assert session.is_complete

    def test_answer_accepts_string(self, session, repo):
        session.answer("wrong")
        assert repo.get_bucket_map()["card1"] == 0

    def test_answer_when_complete_raises(self, session):
        session.answer(AnswerDifficulty.EASY)
        with pytest.raises(InvalidInputError, match="No cards left"):
            session.answer(AnswerDifficulty.EASY)

    def test_invalid_answer_leaves_state_untouched(self, session, repo):
        with pytest.raises(InvalidInputError):
            session.answer("maybe")

        assert repo.get_history() == []
        assert session.current_card == "card1"

    def test_advance_day_rebuilds_due_list(self, session):
        session.answer(AnswerDifficulty.EASY)

        assert session.advance_day() == 2
        # card1 moved to bucket 1, joining card2 and card3
        assert session.due_cards == ["card1", "card2", "card3"]
        assert session.position == 0

    def test_easy_on_every_due_card(self, repo, now):
        session = StudySession(repo, day=4, clock=lambda: now)
        due = list(session.due_cards)
        before = repo.get_bucket_map()

        while not session.is_complete:
            session.answer(AnswerDifficulty.EASY)

        after = repo.get_bucket_map()
        assert due == ["card1", "card4"]
        assert all(after[c] == before[c] + 1 for c in due)
        assert len(repo.get_history()) == len(due)

    def test_add_card(self, session, repo):
        assert session.add_card("new") is True
        assert session.add_card("new") is False
        assert repo.get_bucket_map()["new"] == 0

        session.advance_day()
        assert "new" in session.due_cards

    def test_progress(self, session):
        session.answer(AnswerDifficulty.WRONG)
        stats = session.progress()

        assert stats.total_cards == 4
        assert stats.most_difficult_cards == ["card1"]

    def test_retired_cards_stay_put(self, now):
        repo = InMemoryStudyStateRepository({"done": 3})
        session = StudySession(repo, day=8, retired_bucket=3, clock=lambda: now)

        session.answer(AnswerDifficulty.WRONG)

        assert repo.get_bucket_map()["done"] == 3

    @pytest.mark.parametrize("day", [0, -2])
    def test_invalid_start_day(self, repo, day):
        with pytest.raises(InvalidInputError):
            StudySession(repo, day=day)


def test_advance_day_logs_at_debug(repo, now, caplog):
    session = StudySession(repo, day=1, clock=lambda: now)

    with caplog.at_level(logging.DEBUG, logger="leitner.application.session"):
        session.advance_day()

    messages = [r for r in caplog.records if "Now practicing day 2" in r.getMessage()]
    assert [r.levelno for r in messages] == [logging.DEBUG]
