"""
Progress calculator for deriving learning insights from the practice history.

This is a pure computation module with no I/O.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone

from leitner.domain.constants import (
    DEFAULT_RETIRED_BUCKET,
    IMPROVEMENT_WINDOW_DAYS,
    MAX_DIFFICULT_CARDS,
)
from leitner.domain.errors import InvalidInputError
from leitner.domain.models import AnswerDifficulty, BucketMap, PracticeRecord
from leitner.domain.stats.models import ProgressStats


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class ProgressCalculator:
    """
    Computes a ProgressStats snapshot from a bucket map and practice history.

    Stateless and side-effect free.
    """

    def __init__(
        self,
        window_days: int = IMPROVEMENT_WINDOW_DAYS,
        max_difficult: int = MAX_DIFFICULT_CARDS,
    ):
        """
        Args:
            window_days: How far back a card's latest review may lie and
                still count as a recent improvement.
            max_difficult: Length cap for ``most_difficult_cards``.
        """
        self.window_days = window_days
        self.max_difficult = max_difficult

    def compute(
        self,
        bucket_map: BucketMap,
        history: Sequence[PracticeRecord],
        retired_bucket: int = DEFAULT_RETIRED_BUCKET,
        now: datetime | None = None,
    ) -> ProgressStats:
        """
        Build the progress snapshot.

        Raises:
            InvalidInputError: If ``bucket_map`` is not a mapping or
                ``history`` is not a sequence of records, or if
                ``retired_bucket`` is negative.
        """
        valid_history = isinstance(history, Sequence) and not isinstance(history, (str, bytes))
        if not isinstance(bucket_map, Mapping) or not valid_history:
            raise InvalidInputError("Invalid input types")
        if retired_bucket < 0:
            raise InvalidInputError(f"Retired bucket must be non-negative, got {retired_bucket}")

        cards_by_bucket = self._count_by_bucket(bucket_map, retired_bucket)
        now = _as_utc(now) if now else datetime.now(timezone.utc)

        return ProgressStats(
            total_cards=len(bucket_map),
            cards_by_bucket=cards_by_bucket,
            retired_cards=cards_by_bucket[retired_bucket],
            average_attempts=self._compute_average_attempts(history),
            most_difficult_cards=self._find_most_difficult(history),
            recent_improvements=self._find_recent_improvements(history, now),
        )

    def _count_by_bucket(self, bucket_map: BucketMap, retired_bucket: int) -> list[int]:
        """
        Histogram of buckets 0..retired_bucket.

        Cards outside that range are left out rather than rejected.
        """
        counts = [0] * (retired_bucket + 1)
        for bucket in bucket_map.values():
            if 0 <= bucket <= retired_bucket:
                counts[bucket] += 1
        return counts

    def _compute_average_attempts(self, history: Sequence[PracticeRecord]) -> float:
        reviewed = {record.card_id for record in history}
        if not reviewed:
            return 0.0
        return len(history) / len(reviewed)

    def _find_most_difficult(self, history: Sequence[PracticeRecord]) -> list[str]:
        """
        Cards ranked by WRONG answers, most first.

        Ties keep the order in which each card was first answered wrong.
        Cards never answered wrong are not ranked.
        """
        wrong_by_card: dict[str, int] = {}
        for record in history:
            if record.difficulty == AnswerDifficulty.WRONG:
                wrong_by_card[record.card_id] = wrong_by_card.get(record.card_id, 0) + 1

        ranked = sorted(wrong_by_card, key=lambda card_id: -wrong_by_card[card_id])
        return ranked[: self.max_difficult]

    def _find_recent_improvements(
        self, history: Sequence[PracticeRecord], now: datetime
    ) -> list[str]:
        """
        Cards whose latest review sits in the window and landed above some
        earlier review's bucket.
        """
        window_start = now - timedelta(days=self.window_days)

        by_card: dict[str, list[PracticeRecord]] = {}
        for record in history:
            by_card.setdefault(record.card_id, []).append(record)

        improved: list[str] = []
        for card_id, records in by_card.items():
            if len(records) < 2:
                continue

            ordered = sorted(records, key=lambda r: _as_utc(r.date))
            latest = ordered[-1]
            if _as_utc(latest.date) < window_start:
                continue

            for previous in reversed(ordered[:-1]):
                if latest.bucket > previous.bucket:
                    improved.append(card_id)
                    break

        return improved


def compute_progress(
    bucket_map: BucketMap,
    history: Sequence[PracticeRecord],
    retired_bucket: int = DEFAULT_RETIRED_BUCKET,
    *,
    now: datetime | None = None,
    window_days: int = IMPROVEMENT_WINDOW_DAYS,
    max_difficult: int = MAX_DIFFICULT_CARDS,
) -> ProgressStats:
    """
    Compute statistics about a learner's progress.

    Args:
        bucket_map: card_id -> current bucket.
        history: Practice records in any order.
        retired_bucket: Bucket that marks a card as mastered.
        now: Reference time for the improvement window; defaults to now (UTC).
        window_days: Length of the improvement window in days.
        max_difficult: Maximum number of most-difficult cards reported.

    Returns:
        A fresh ProgressStats snapshot.
    """
    calculator = ProgressCalculator(window_days=window_days, max_difficult=max_difficult)
    return calculator.compute(bucket_map, history, retired_bucket, now=now)
