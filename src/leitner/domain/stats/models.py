"""
Domain models for learning-progress statistics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field


@dataclass
class ProgressStats:
    """
    Snapshot of a learner's progress, recomputed on demand.

    Attributes:
        total_cards: Number of cards in the bucket map.
        cards_by_bucket: Card count per bucket, index 0..retired bucket.
        retired_cards: Cards sitting in the retired bucket.
        average_attempts: Reviews per distinct reviewed card (0 if none).
        most_difficult_cards: Up to N card ids with the most WRONG answers.
        recent_improvements: Card ids that moved up within the recent window.
    """

    total_cards: int
    cards_by_bucket: list[int]
    retired_cards: int
    average_attempts: float
    most_difficult_cards: list[str] = field(default_factory=list)
    recent_improvements: list[str] = field(default_factory=list)

    def bucket_distribution(self) -> list[float]:
        """Share of all cards held by each bucket, as percentages."""
        if self.total_cards == 0:
            return [0.0] * len(self.cards_by_bucket)
        return [count / self.total_cards * 100 for count in self.cards_by_bucket]
