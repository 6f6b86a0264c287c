"""
Read-only loader for study-state snapshots written as YAML.

Expected shape::

    buckets:
      card1: 0
      card2: 3
    history:
      - card_id: card1
        date: 2026-10-18T09:30:00Z
        difficulty: wrong
        bucket: 0
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any

import yaml  # type: ignore
import yaml.error

from leitner.domain.errors import InvalidInputError
from leitner.domain.models import AnswerDifficulty, PracticeRecord
from leitner.infrastructure.adapters.memory_store import InMemoryStudyStateRepository

logger = logging.getLogger(__name__)


@dataclass
class StudyState:
    """Bucket map and history as read from a snapshot."""

    bucket_map: dict[str, int] = field(default_factory=dict)
    history: list[PracticeRecord] = field(default_factory=list)

    def to_repository(self) -> InMemoryStudyStateRepository:
        return InMemoryStudyStateRepository(self.bucket_map, self.history)


def _parse_date(value: Any, where: str) -> datetime:
    # YAML already turns ISO timestamps into datetime/date objects
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            moment = datetime.fromisoformat(value)
        except ValueError:
            raise InvalidInputError(f"{where}: invalid date {value!r}") from None
    else:
        raise InvalidInputError(f"{where}: missing or invalid date")

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _parse_bucket(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(f"{where}: bucket must be a non-negative integer, got {value!r}")
    return value


def _parse_record(raw: Any, index: int) -> PracticeRecord:
    where = f"history[{index}]"
    if not isinstance(raw, dict):
        raise InvalidInputError(f"{where}: expected a mapping")

    card_id = raw.get("card_id")
    if card_id is None or card_id == "":
        raise InvalidInputError(f"{where}: missing card_id")

    try:
        difficulty = AnswerDifficulty.coerce(raw.get("difficulty"))
    except InvalidInputError as e:
        raise InvalidInputError(f"{where}: {e}") from None

    return PracticeRecord(
        card_id=str(card_id),
        date=_parse_date(raw.get("date"), where),
        difficulty=difficulty,
        bucket=_parse_bucket(raw.get("bucket"), where),
    )


def parse_study_state(data: Any) -> StudyState:
    """
    Validate a decoded YAML document and build a StudyState.

    An empty document is an empty state.
    """
    if data is None:
        return StudyState()
    if not isinstance(data, dict):
        raise InvalidInputError("Snapshot must be a mapping with 'buckets' and 'history'")

    raw_buckets = data.get("buckets") or {}
    if not isinstance(raw_buckets, dict):
        raise InvalidInputError("'buckets' must be a mapping of card id to bucket")
    bucket_map = {
        str(card_id): _parse_bucket(bucket, f"buckets[{card_id!r}]")
        for card_id, bucket in raw_buckets.items()
    }

    raw_history = data.get("history") or []
    if not isinstance(raw_history, list):
        raise InvalidInputError("'history' must be a list of practice records")
    history = [_parse_record(raw, i) for i, raw in enumerate(raw_history)]

    return StudyState(bucket_map=bucket_map, history=history)


def load_study_state(path: Path) -> StudyState:
    """
    Read a YAML snapshot from disk.

    Raises:
        InvalidInputError: If the file is a directory, is not UTF-8, is not
            valid YAML, or is not shaped like a snapshot.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidInputError(f"{path}: not valid UTF-8 ({e})") from e
    except IsADirectoryError as e:
        raise InvalidInputError(f"{path}: is a directory, not a snapshot file") from e

    try:
        data = yaml.safe_load(text)
    except yaml.error.YAMLError as e:
        raise InvalidInputError(f"{path}: invalid YAML ({e})") from e

    state = parse_study_state(data)
    logger.debug(f"Loaded {len(state.bucket_map)} cards and {len(state.history)} records from {path}")
    return state
