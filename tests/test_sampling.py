import random
from collections import Counter

import pytest

from orfsets.sampling import choose_k


def test_choose_k_distinct_and_capped():
    rng = random.Random(0)
    picked = choose_k(list(range(4)), 3, rng)
    assert len(picked) == 3 and len(set(picked)) == 3
    assert sorted(choose_k(["a", "b"], 5, rng)) == ["a", "b"]


def test_choose_k_rejects_zero():
    with pytest.raises(ValueError):
        choose_k([1, 2], 0, random.Random(0))


def test_choose_k_not_biased_to_scan_order():
    rng = random.Random(42)
    counts = Counter()
    for _ in range(3000):
        counts.update(choose_k(range(10), 1, rng))
    # every item drawn roughly 300 times
    assert min(counts.values()) > 200
    assert set(counts) == set(range(10))
