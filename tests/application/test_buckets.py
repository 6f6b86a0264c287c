import pytest

from leitner.application.buckets import get_bucket_range, to_bucket_sets
from leitner.domain.errors import InvalidInputError


class TestToBucketSets:
    def test_empty_map_gives_single_empty_set(self):
        assert to_bucket_sets({}) == [set()]

    def test_groups_cards_by_bucket(self, bucket_map):
        result = to_bucket_sets(bucket_map)

        assert len(result) == 3
        assert result[0] == {"card1"}
        assert result[1] == {"card2", "card3"}
        assert result[2] == {"card4"}

    def test_gaps_are_empty_sets(self):
        result = to_bucket_sets({"a": 3})

        assert result == [set(), set(), set(), {"a"}]

    def test_partition_is_faithful(self):
        bucket_map = {f"c{i}": i % 4 for i in range(20)}
        result = to_bucket_sets(bucket_map)

        seen = [card for cards in result for card in cards]
        assert sorted(seen) == sorted(bucket_map)
        for bucket, cards in enumerate(result):
            assert all(bucket_map[c] == bucket for c in cards)

    def test_does_not_mutate_input(self, bucket_map):
        before = dict(bucket_map)
        to_bucket_sets(bucket_map)
        assert bucket_map == before

    def test_negative_bucket_rejected(self):
        with pytest.raises(InvalidInputError):
            to_bucket_sets({"a": -1})


class TestGetBucketRange:
    def test_all_empty(self):
        assert get_bucket_range([set()]) == (-1, -1)

    def test_range_skips_empty_ends(self):
        bucket_sets = [set(), {"card1"}, set(), {"card2"}, set()]
        assert get_bucket_range(bucket_sets) == (1, 3)

    def test_range_with_gap(self):
        bucket_sets = [{"card1"}, set(), {"card2"}, {"card3"}]
        assert get_bucket_range(bucket_sets) == (0, 3)

    def test_single_bucket(self):
        assert get_bucket_range([set(), {"x"}]) == (1, 1)


class TestToBucketSetsTypes:
    @pytest.mark.parametrize("bucket", [1.0, "2", None, True])
    def test_non_integer_bucket_rejected(self, bucket):
        with pytest.raises(InvalidInputError, match="non-negative integer bucket"):
            to_bucket_sets({"a": 0, "b": bucket})
