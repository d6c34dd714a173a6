"""
Tests for the match rule.
"""

import pytest

from ..engine_core.rules import can_match, find_match, has_any_match
from ..engine_core.state import Card, Suit, MIN_RANK, MAX_RANK


RANKS = range(MIN_RANK, MAX_RANK + 1)


class TestCanMatch:
    """Tests for can_match."""

    @pytest.mark.parametrize("a,b", [(1, 2), (2, 1), (12, 13), (6, 7)])
    def test_adjacent_ranks_match(self, a, b):
        assert can_match(a, b)

    @pytest.mark.parametrize("a,b", [(4, 4), (12, 4), (1, 3), (1, 13)])
    def test_other_ranks_do_not_match(self, a, b):
        """Includes King/Ace: there is no wrap-around."""
        assert not can_match(a, b)

    def test_symmetric_for_all_ranks(self):
        for a in RANKS:
            for b in RANKS:
                assert can_match(a, b) == can_match(b, a)

    def test_every_rank_has_expected_partners(self):
        for a in RANKS:
            partners = {b for b in RANKS if can_match(a, b)}
            assert partners == {r for r in (a - 1, a + 1) if r in RANKS}


class TestFindMatch:
    """Tests for searching a zone for a match."""

    def test_suit_is_ignored(self):
        cards = [Card(card_id=0, rank=5, suit=Suit.HEARTS)]
        assert find_match(4, cards) is cards[0]
        assert find_match(6, cards) is cards[0]

    def test_returns_first_match(self):
        cards = [
            Card(card_id=0, rank=9, suit=Suit.CLUBS),
            Card(card_id=1, rank=3, suit=Suit.CLUBS),
            Card(card_id=2, rank=5, suit=Suit.SPADES),
        ]
        assert find_match(4, cards).card_id == 1

    def test_no_match(self):
        cards = [Card(card_id=0, rank=12, suit=Suit.CLUBS)]
        assert find_match(4, cards) is None
        assert not has_any_match(4, cards)

    def test_empty_zone_never_matches(self):
        assert not has_any_match(7, [])
