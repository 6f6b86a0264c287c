"""
In-memory Study State Repository: Infrastructure adapter.

Implements StudyStateRepository on plain dicts and lists. Used by the CLI
after loading a snapshot, and by callers that persist state themselves.
"""

import logging
from collections.abc import Iterable, Mapping

from leitner.domain.errors import InvalidInputError
from leitner.domain.models import PracticeRecord
from leitner.domain.stats.ports import StudyStateRepository

logger = logging.getLogger(__name__)


class InMemoryStudyStateRepository(StudyStateRepository):
    """
    Keeps the bucket map and history in process memory.

    Reads return copies, so callers cannot change stored state except
    through ``set_bucket`` and ``append_record``.
    """

    def __init__(
        self,
        bucket_map: Mapping[str, int] | None = None,
        history: Iterable[PracticeRecord] | None = None,
    ):
        self._buckets: dict[str, int] = dict(bucket_map or {})
        self._history: list[PracticeRecord] = list(history or [])

    def get_bucket_map(self) -> dict[str, int]:
        return dict(self._buckets)

    def get_history(self) -> list[PracticeRecord]:
        return list(self._history)

    def set_bucket(self, card_id: str, bucket: int) -> None:
        if bucket < 0:
            raise InvalidInputError(f"Card {card_id!r} cannot move to negative bucket {bucket}")
        self._buckets[card_id] = bucket

    def append_record(self, record: PracticeRecord) -> None:
        self._history.append(record)
        logger.debug(f"Recorded practice for {record.card_id} (bucket {record.bucket})")
