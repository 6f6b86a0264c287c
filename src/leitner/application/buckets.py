"""
Bucket index helpers.

Converts a flat card -> bucket assignment into the per-bucket partition used
by the scheduler. Pure computation, no I/O.
"""

from leitner.domain.errors import InvalidInputError
from leitner.domain.models import BucketMap, BucketSets


def to_bucket_sets(bucket_map: BucketMap) -> BucketSets:
    """
    Group card ids by bucket.

    Args:
        bucket_map: card_id -> bucket number (non-negative).

    Returns:
        A list whose index i holds the ids in bucket i. Its length is the
        highest bucket present + 1, and an empty map gives ``[set()]``.

    Raises:
        InvalidInputError: If any bucket number is not a non-negative integer.
    """
    max_bucket = 0
    for card_id, bucket in bucket_map.items():
        if isinstance(bucket, bool) or not isinstance(bucket, int) or bucket < 0:
            raise InvalidInputError(
                f"Card {card_id!r} must have a non-negative integer bucket, got {bucket!r}"
            )
        max_bucket = max(max_bucket, bucket)

    bucket_sets: BucketSets = [set() for _ in range(max_bucket + 1)]
    for card_id, bucket in bucket_map.items():
        bucket_sets[bucket].add(card_id)

    return bucket_sets


def get_bucket_range(bucket_sets: BucketSets) -> tuple[int, int]:
    """
    Find the lowest and highest non-empty buckets.

    Returns:
        ``(min_index, max_index)``, or ``(-1, -1)`` if every bucket is empty.
    """
    min_bucket = -1
    max_bucket = -1

    for i, cards in enumerate(bucket_sets):
        if cards:
            if min_bucket == -1:
                min_bucket = i
            max_bucket = i

    return min_bucket, max_bucket
