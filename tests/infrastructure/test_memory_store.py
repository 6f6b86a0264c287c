import pytest

from leitner.domain.errors import InvalidInputError
from leitner.domain.models import AnswerDifficulty
from leitner.infrastructure.adapters.memory_store import InMemoryStudyStateRepository


def test_reads_return_copies(repo):
    buckets = repo.get_bucket_map()
    buckets["card1"] = 4
    history = repo.get_history()
    history.append("junk")

    assert repo.get_bucket_map()["card1"] == 0
    assert repo.get_history() == []


def test_does_not_alias_constructor_input():
    source = {"a": 1}
    repo = InMemoryStudyStateRepository(source)
    repo.set_bucket("a", 2)

    assert source == {"a": 1}


def test_set_bucket_and_append(make_record):
    repo = InMemoryStudyStateRepository()
    repo.set_bucket("a", 2)
    rec = make_record("a", 0, AnswerDifficulty.EASY, 2)
    repo.append_record(rec)

    assert repo.get_bucket_map() == {"a": 2}
    assert repo.get_history() == [rec]


def test_negative_bucket_rejected():
    with pytest.raises(InvalidInputError):
        InMemoryStudyStateRepository().set_bucket("a", -1)
