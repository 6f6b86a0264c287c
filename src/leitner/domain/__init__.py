# Domain Package
from .errors import InvalidInputError
from .models import AnswerDifficulty, BucketMap, BucketSets, PracticeRecord

__all__ = ["AnswerDifficulty", "BucketMap", "BucketSets", "PracticeRecord", "InvalidInputError"]
