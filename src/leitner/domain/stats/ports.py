"""
Ports (interfaces) for study-state storage.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from leitner.domain.models import PracticeRecord


class StudyStateRepository(ABC):
    """
    Port for reading and writing a learner's bucket map and practice history.

    Implementations:
        - InMemoryStudyStateRepository: Holds state in process memory.
    """

    @abstractmethod
    def get_bucket_map(self) -> dict[str, int]:
        """
        Return the current card_id -> bucket assignment.

        Returns:
            A fresh dict; mutating it does not affect the store.
        """
        pass

    @abstractmethod
    def get_history(self) -> list[PracticeRecord]:
        """
        Return every recorded practice entry in insertion order.
        """
        pass

    @abstractmethod
    def set_bucket(self, card_id: str, bucket: int) -> None:
        """
        Write the bucket for a single card, adding it if unknown.
        """
        pass

    @abstractmethod
    def append_record(self, record: PracticeRecord) -> None:
        """
        Append a practice entry to the history.
        """
        pass
