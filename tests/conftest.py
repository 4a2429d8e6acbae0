"""Pytest fixtures for blackjack simulator tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from bjsim.cards import Card, Rank, Shoe, Suit, standard_deck
from bjsim.config import GameSettings
from bjsim.counting import HiLoSystem, KOSystem, Omega2System, WongHalvesSystem
from bjsim.game import Game, GameState, Winner
from bjsim.hand import Hand


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe with a cut card."""
    s = Shoe(deck_count=6, contains_blank=True, rng=rng)
    s.rebuild()
    return s


@pytest.fixture
def deck():
    """One standard 52-card deck."""
    return standard_deck()


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand.from_cards([Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand.from_cards([Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand.from_cards([Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand.from_cards([Card(Rank.EIGHT, Suit.SPADES), Card(Rank.EIGHT, Suit.HEARTS)])


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand.from_cards(
        [
            Card(Rank.TEN, Suit.SPADES),
            Card(Rank.SIX, Suit.HEARTS),
            Card(Rank.KING, Suit.CLUBS),
        ]
    )


@pytest.fixture
def hilo():
    """Hi-Lo counting system."""
    return HiLoSystem()


@pytest.fixture
def ko():
    """KO counting system."""
    return KOSystem()


@pytest.fixture
def omega2():
    """Omega II counting system."""
    return Omega2System()


@pytest.fixture
def wong_halves():
    """Wong Halves counting system."""
    return WongHalvesSystem()


@pytest.fixture
def settings():
    """Six decks, basic strategy, flat bets, fixed seed."""
    return GameSettings(seed=42)


@pytest.fixture
def game(settings):
    """A new engine built from the default settings."""
    return Game.from_settings(settings)


def cards(spec: str) -> list[Card]:
    """Parse ``"AH AS"`` into cards."""
    return [Card.from_string(s) for s in spec.split()]


@pytest.fixture
def make_state():
    """Build a decision snapshot from card strings."""

    def _make(
        player: str | None = None,
        dealer: str = "10S 7H",
        *,
        splits_remaining: int = 3,
        doubled: bool = False,
        split_child: bool = False,
        last_winner: Winner = Winner.NONE,
        last_bet: int = 10,
        init_bet: int = 10,
        running_count: int = 0,
        true_count: float = 0.0,
        deck_count: int = 6,
        dealer_cutoff: int = 17,
        allow_early_surrender: bool = False,
        allow_late_surrender: bool = False,
    ) -> GameState:
        player_hand = None
        if player is not None:
            player_hand = Hand.from_cards(
                cards(player),
                init_bet=last_bet,
                doubled=doubled,
                split_child=split_child,
            )
        dealer_hand = Hand.from_cards(cards(dealer))
        upcard = dealer_hand.cards[0]
        return GameState(
            init_bet=init_bet,
            last_bet=last_bet,
            played_cards=(),
            dealer_upcard=upcard,
            dealer_upcard_strength=upcard.upcard_strength,
            player_hand=player_hand,
            dealer_hand=dealer_hand,
            dealer_cutoff=dealer_cutoff,
            deck_count=deck_count,
            contains_blank=True,
            last_winner=last_winner,
            running_count=running_count,
            true_count=true_count,
            splits_remaining=splits_remaining,
            allow_early_surrender=allow_early_surrender,
            allow_late_surrender=allow_late_surrender,
        )

    return _make


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw, ranks=Rank.playing_ranks()):
    """Generate a random playing card."""
    rank = draw(st.sampled_from(list(ranks)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=2, max_cards=5):
    """Generate a random hand."""
    drawn = draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
    return Hand.from_cards(drawn)
