# Infrastructure Adapters Package
from .memory_store import InMemoryStudyStateRepository

__all__ = ["InMemoryStudyStateRepository"]
