"""leitner: Leitner-box spaced repetition scheduling."""

from leitner.application.buckets import get_bucket_range, to_bucket_sets
from leitner.application.hints import get_hint
from leitner.application.scheduler import practice, update
from leitner.application.stats.progress_calculator import compute_progress
from leitner.consts import VERSION
from leitner.domain.errors import InvalidInputError
from leitner.domain.models import AnswerDifficulty, PracticeRecord
from leitner.domain.stats.models import ProgressStats

__version__ = VERSION

__all__ = [
    "AnswerDifficulty",
    "InvalidInputError",
    "PracticeRecord",
    "ProgressStats",
    "compute_progress",
    "get_bucket_range",
    "get_hint",
    "practice",
    "to_bucket_sets",
    "update",
]
