"""
Study session driver.

Walks the cards due on the current day, applies each answer through the
Leitner update rule, and records it in the practice history:
1. Partition the bucket map and select today's due cards
2. Update the current card's bucket from the answer
3. Append a PracticeRecord and move to the next card
"""

import logging
from collections.abc import Callable
from datetime import datetime

from leitner.application.buckets import to_bucket_sets
from leitner.application.scheduler import practice, update
from leitner.application.stats.progress_calculator import ProgressCalculator
from leitner.application.stats.service import utc_now
from leitner.domain.constants import DEFAULT_RETIRED_BUCKET, NEW_CARD_BUCKET
from leitner.domain.errors import InvalidInputError
from leitner.domain.models import AnswerDifficulty, PracticeRecord
from leitner.domain.stats.models import ProgressStats
from leitner.domain.stats.ports import StudyStateRepository

logger = logging.getLogger(__name__)


class StudySession:
    """
    Day-by-day practice over a StudyStateRepository.

    The repository is the only place state is written; the session keeps
    just the day counter and its position in today's due list.
    """

    def __init__(
        self,
        repo: StudyStateRepository,
        day: int = 1,
        retired_bucket: int = DEFAULT_RETIRED_BUCKET,
        clock: Callable[[], datetime] = utc_now,
        calculator: ProgressCalculator | None = None,
    ):
        if isinstance(day, bool) or not isinstance(day, int) or day < 1:
            raise InvalidInputError(f"Day must be a positive integer, got {day!r}")

        self._repo = repo
        self._clock = clock
        self._calc = calculator or ProgressCalculator()
        self.retired_bucket = retired_bucket
        self.day = day
        self.position = 0
        self.due_cards: list[str] = self._select_due_cards()

    def _select_due_cards(self) -> list[str]:
        bucket_sets = to_bucket_sets(self._repo.get_bucket_map())
        return sorted(practice(bucket_sets, self.day))

    @property
    def current_card(self) -> str | None:
        if self.position >= len(self.due_cards):
            return None
        return self.due_cards[self.position]

    @property
    def is_complete(self) -> bool:
        return self.current_card is None

    def add_card(self, card_id: str) -> bool:
        """
        Register a new card in bucket 0.

        Returns False if the card is already known. New cards join the
        due list on the next call to ``advance_day``.
        """
        if card_id in self._repo.get_bucket_map():
            logger.warning(f"Card {card_id!r} already exists, not re-adding")
            return False
        self._repo.set_bucket(card_id, NEW_CARD_BUCKET)
        return True

    def answer(self, difficulty: AnswerDifficulty | str) -> PracticeRecord:
        """
        Apply an answer to the current card and advance to the next one.

        Raises:
            InvalidInputError: If the difficulty is invalid or no card is left
                for today.
        """
        difficulty = AnswerDifficulty.coerce(difficulty)
        card_id = self.current_card
        if card_id is None:
            raise InvalidInputError(f"No cards left to practice on day {self.day}")

        current_bucket = self._repo.get_bucket_map().get(card_id, NEW_CARD_BUCKET)
        new_bucket = update(current_bucket, difficulty, self.retired_bucket)
        self._repo.set_bucket(card_id, new_bucket)

        record = PracticeRecord(
            card_id=card_id,
            date=self._clock(),
            difficulty=difficulty,
            bucket=new_bucket,
        )
        self._repo.append_record(record)
        self.position += 1

        logger.debug(
            f"Day {self.day}: {card_id} answered {difficulty.value}, "
            f"bucket {current_bucket} -> {new_bucket}"
        )
        return record

    def advance_day(self) -> int:
        """Move to the next day and rebuild its due list."""
        self.day += 1
        self.position = 0
        self.due_cards = self._select_due_cards()
        logger.debug(f"Now practicing day {self.day} ({len(self.due_cards)} cards due)")
        return self.day

    def progress(self) -> ProgressStats:
        return self._calc.compute(
            self._repo.get_bucket_map(),
            self._repo.get_history(),
            self.retired_bucket,
            now=self._clock(),
        )
