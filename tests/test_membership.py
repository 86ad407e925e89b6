"""Membership and false positive checks on a deterministic 80/20 split.

A sorted word list is split 80/20; the filter is built from the 80% training
set and then checked for:

1. Membership of every training word (no false negatives)
2. False positive rate on the held-out 20%
3. Collision rate on simple modifications of held-out words
4. Memory use per inserted word
"""
from __future__ import annotations

from typing import Tuple

import pytest

from bloomy import DEFAULT_FALSE_POSITIVE_RATE, BloomFilter

NUM_WORDS = 5000


def build_split(words: list[str]) -> Tuple[BloomFilter, list[str], list[str]]:
    """Create a deterministic 80/20 split and build the filter from the 80%.

    Returns (bloom_filter, training_words, test_words).
    """
    split = int(len(words) * 0.8)
    train = words[:split]
    test = words[split:]

    bloom = BloomFilter(len(train))
    bloom.update(train)

    return bloom, train, test


@pytest.fixture(scope="module")
def split() -> Tuple[BloomFilter, list[str], list[str]]:
    words = sorted(f"word{i:05d}" for i in range(NUM_WORDS))
    return build_split(words)


class TestSplitMembership:
    def test_membership(self, split) -> None:
        """Every training item is present."""
        bloom, train, _ = split
        missing = [w for w in train if w not in bloom]
        assert missing == []

    def test_false_positive_on_heldout(self, split) -> None:
        """Empirical rate on held-out words stays near the configured 1%."""
        bloom, _, test = split
        false_positives = sum(1 for w in test if w in bloom)
        fpr = false_positives / len(test)
        assert fpr < 3 * DEFAULT_FALSE_POSITIVE_RATE

    def test_collision_analysis(self, split) -> None:
        """Near-miss variants of held-out words are mostly rejected."""
        bloom, train, test = split
        modifications = []
        for word in test[:500]:
            modifications.append(word + "x")
            modifications.append(word[:-1] + "z")
            modifications.append("x" + word)

        known = set(train) | set(test)
        modifications = [m for m in modifications if m not in known]
        assert modifications

        rate = sum(1 for m in modifications if m in bloom) / len(modifications)
        assert rate < 3 * DEFAULT_FALSE_POSITIVE_RATE

    def test_properties(self, split) -> None:
        """About 9.6 bits per item at 1%."""
        bloom, train, _ = split
        bytes_len = len(bloom.as_bytes())

        assert bytes_len == (bloom.bits() + 7) // 8
        assert bloom.hashes() == 7
        assert bytes_len / len(train) == pytest.approx(1.2, abs=0.01)
        assert bloom.count() == pytest.approx(len(train), rel=0.05)
