"""
Progress Service: Application layer orchestrator.

Coordinates reading study state from the repository and summarizing it.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from leitner.domain.constants import DEFAULT_RETIRED_BUCKET
from leitner.domain.stats.models import ProgressStats
from leitner.domain.stats.ports import StudyStateRepository

from .progress_calculator import ProgressCalculator

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProgressService:
    """
    Application service producing progress snapshots.

    Depends on the StudyStateRepository abstraction, not a concrete store.
    """

    def __init__(
        self,
        repo: StudyStateRepository,
        calculator: ProgressCalculator | None = None,
        retired_bucket: int = DEFAULT_RETIRED_BUCKET,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            repo: The repository (port) holding bucket map and history.
            calculator: Optional custom calculator; uses default if not provided.
            retired_bucket: Bucket that marks a card as mastered.
            clock: Source of "now" for the improvement window.
        """
        self._repo = repo
        self._calc = calculator or ProgressCalculator()
        self.retired_bucket = retired_bucket
        self._clock = clock

    def get_progress(self) -> ProgressStats:
        """Summarize the repository's current state."""
        bucket_map = self._repo.get_bucket_map()
        history = self._repo.get_history()
        logger.debug(f"Computing progress for {len(bucket_map)} cards, {len(history)} records")
        return self._calc.compute(bucket_map, history, self.retired_bucket, now=self._clock())

    def get_struggling_cards(self) -> list[str]:
        """
        Cards that are both among the most difficult and still in bucket 0.
        """
        stats = self.get_progress()
        bucket_map = self._repo.get_bucket_map()
        return [cid for cid in stats.most_difficult_cards if bucket_map.get(cid, 0) == 0]
