"""
Leitner scheduling rules.

- ``practice`` picks the cards due on a given day.
- ``update`` moves a card between buckets after an answer.

Bucket 0 is reviewed every day and bucket i every 2^i days, so bucket 1
comes up every other day, bucket 2 every fourth day, and so on.
"""

import logging

from leitner.domain.errors import InvalidInputError
from leitner.domain.models import AnswerDifficulty, BucketSets

logger = logging.getLogger(__name__)


def is_bucket_due(bucket: int, day: int) -> bool:
    """True if cards in ``bucket`` are reviewed on ``day``."""
    return bucket == 0 or day % (2**bucket) == 0


def practice(bucket_sets: BucketSets, day: int) -> set[str]:
    """
    Select the cards to practice on a given day.

    Args:
        bucket_sets: Partition produced by ``to_bucket_sets``.
        day: Day counter, starting at 1.

    Returns:
        Union of every bucket due on ``day``.

    Raises:
        InvalidInputError: If ``day`` is not an integer >= 1.
    """
    if isinstance(day, bool) or not isinstance(day, int) or day < 1:
        raise InvalidInputError(f"Day must be a positive integer, got {day!r}")

    todays_practice: set[str] = set()
    for bucket, cards in enumerate(bucket_sets):
        if is_bucket_due(bucket, day):
            todays_practice.update(cards)

    logger.debug(f"Day {day}: {len(todays_practice)} cards due")
    return todays_practice


def update(current_bucket: int, difficulty: AnswerDifficulty | str, retired_bucket: int) -> int:
    """
    Compute a card's next bucket after a practice trial.

    Retired cards stay retired whatever the answer. Otherwise WRONG resets
    to bucket 0, HARD moves down one bucket (not below 0) and EASY moves up
    one bucket (not above ``retired_bucket``).

    Raises:
        InvalidInputError: If ``retired_bucket`` is negative, or if
            ``difficulty`` is not WRONG, HARD or EASY for a card that is
            not yet retired.
    """
    if retired_bucket < 0:
        raise InvalidInputError(f"Retired bucket must be non-negative, got {retired_bucket}")

    if current_bucket >= retired_bucket:
        return retired_bucket

    difficulty = AnswerDifficulty.coerce(difficulty)

    if difficulty is AnswerDifficulty.WRONG:
        return 0
    if difficulty is AnswerDifficulty.HARD:
        return max(0, current_bucket - 1)
    return min(current_bucket + 1, retired_bucket)
