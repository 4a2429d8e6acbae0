"""Tests for Card and Shoe classes."""

import pytest
from random import Random

from hypothesis import given, strategies as st

from bjsim.cards import (
    BLANK_OFFSET_MAX,
    BLANK_OFFSET_MIN,
    Card,
    DealerUpcardStrength,
    Rank,
    Shoe,
    Suit,
    standard_deck,
)
from bjsim.errors import ConfigurationError


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES
        assert card.soft

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_deflated_ace_counts_one(self):
        ace = Card(Rank.ACE, Suit.SPADES)
        hard = ace.deflated()
        assert hard.value == 1
        assert not hard.is_soft_ace
        assert ace.value == 11  # original untouched

    def test_deflate_is_idempotent(self):
        hard = Card(Rank.ACE, Suit.SPADES).deflated()
        assert hard.deflated() == hard

    def test_inflated_restores_soft_ace(self):
        hard = Card(Rank.ACE, Suit.SPADES, soft=False)
        assert hard.inflated() == Card(Rank.ACE, Suit.SPADES)

    def test_card_is_ten_value(self):
        """Test ten-value detection."""
        for rank in (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING):
            assert Card(rank, Suit.SPADES).is_ten_value
        assert not Card(Rank.NINE, Suit.SPADES).is_ten_value
        assert not Card(Rank.ACE, Suit.SPADES).is_ten_value

    def test_blank_card(self):
        blank = Card.blank()
        assert blank.is_blank
        assert blank.value == 0

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10d") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("T♣") == Card(Rank.TEN, Suit.CLUBS)

    def test_card_from_string_invalid(self):
        with pytest.raises(ValueError):
            Card.from_string("1S")
        with pytest.raises(ValueError):
            Card.from_string("AX")
        with pytest.raises(ValueError):
            Card.from_string("A")

    def test_card_str(self):
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"


class TestUpcardStrength:
    """Dealer upcard classification."""

    @pytest.mark.parametrize("value", [2, 3])
    def test_fair(self, value):
        assert DealerUpcardStrength.from_value(value) is DealerUpcardStrength.FAIR

    @pytest.mark.parametrize("value", [4, 5, 6])
    def test_poor(self, value):
        assert DealerUpcardStrength.from_value(value) is DealerUpcardStrength.POOR

    @pytest.mark.parametrize("value", [7, 8, 9, 10, 11])
    def test_good(self, value):
        assert DealerUpcardStrength.from_value(value) is DealerUpcardStrength.GOOD

    def test_ace_upcard_is_good(self):
        assert Card(Rank.ACE, Suit.SPADES).upcard_strength is DealerUpcardStrength.GOOD


class TestShoe:
    """Tests for the Shoe class."""

    def test_standard_deck_has_52_unique_cards(self):
        cards = standard_deck()
        assert len(cards) == 52
        assert len(set(cards)) == 52

    @given(deck_count=st.integers(min_value=1, max_value=8), contains_blank=st.booleans())
    def test_rebuilt_shoe_size(self, deck_count, contains_blank):
        """A fresh shoe holds 52 cards per deck, plus the cut card if any."""
        shoe = Shoe(deck_count=deck_count, contains_blank=contains_blank, rng=Random(0))
        shoe.rebuild()
        expected = 52 * deck_count + (1 if contains_blank else 0)
        assert len(shoe) == expected
        assert shoe.full_size == expected
        assert shoe.total_cards == 52 * deck_count

    def test_unshuffled_shoe_has_no_blank(self):
        shoe = Shoe(deck_count=2, contains_blank=True)
        assert len(shoe) == 104
        assert not any(card.is_blank for card in shoe)

    def test_zero_decks_rejected(self):
        with pytest.raises(ConfigurationError):
            Shoe(deck_count=0)

    def test_each_rank_appears_four_times_per_deck(self, shoe):
        ranks = [card.rank for card in shoe if not card.is_blank]
        for rank in Rank.playing_ranks():
            assert ranks.count(rank) == 24

    def test_blank_position(self):
        """The cut card surfaces with 59-69 cards still in the shoe."""
        for seed in range(50):
            shoe = Shoe(deck_count=6, contains_blank=True, rng=Random(seed))
            shoe.rebuild()
            cards = list(shoe)
            blanks = [i for i, card in enumerate(cards) if card.is_blank]
            assert len(blanks) == 1
            assert BLANK_OFFSET_MIN <= blanks[0] < BLANK_OFFSET_MAX

    def test_draw_pops_from_top(self, shoe):
        top = list(shoe)[-1]
        assert shoe.draw() == top
        assert shoe.cards_remaining == 6 * 52

    def test_draw_empty_returns_none(self):
        shoe = Shoe(deck_count=1)
        for _ in range(52):
            assert shoe.draw() is not None
        assert shoe.draw() is None

    def test_rebuild_restores_full_shoe(self, shoe):
        for _ in range(100):
            shoe.draw()
        shoe.rebuild()
        assert len(shoe) == shoe.full_size

    def test_decks_remaining(self):
        shoe = Shoe(deck_count=2)
        assert shoe.decks_remaining == 2.0
        for _ in range(26):
            shoe.draw()
        assert shoe.decks_remaining == 1.5
