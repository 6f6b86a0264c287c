# Domain Stats Package
from .models import ProgressStats
from .ports import StudyStateRepository

__all__ = ["ProgressStats", "StudyStateRepository"]
