"""
Domain models for the Leitner system.

These are pure data structures with no I/O or external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .errors import InvalidInputError

# card_id -> bucket number. Cards absent from the map are new (bucket 0).
BucketMap = Mapping[str, int]

# Index i holds the ids of every card currently in bucket i.
BucketSets = list[set[str]]


class AnswerDifficulty(str, Enum):
    """Self-reported recall quality for one review."""

    WRONG = "wrong"
    HARD = "hard"
    EASY = "easy"

    @classmethod
    def coerce(cls, value: object) -> "AnswerDifficulty":
        """
        Accept an AnswerDifficulty or its string value.

        Raises:
            InvalidInputError: If the value is not one of the three levels.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidInputError(f"Unexpected difficulty level: {value!r}") from None


@dataclass(frozen=True)
class PracticeRecord:
    """
    A single entry of the practice history.

    Attributes:
        card_id: The card that was reviewed.
        date: When the review happened. Naive datetimes are read as UTC.
        difficulty: The answer given.
        bucket: Bucket the card landed in after this review.
    """

    card_id: str
    date: datetime
    difficulty: AnswerDifficulty
    bucket: int
