"""Card and Shoe classes - immutable card representations."""

from dataclasses import dataclass, replace
from enum import Enum, auto
from random import Random
from typing import Iterator

from bjsim.errors import ConfigurationError, InvariantViolation

CARDS_PER_DECK = 52

# The blank lands this many cards from the bottom of the shoe: [59, 70)
BLANK_OFFSET_MIN = 59
BLANK_OFFSET_MAX = 70


class Suit(Enum):
    """Card suits."""

    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks. BLANK is the cut-card sentinel and is never dealt."""

    BLANK = 0
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.BLANK: "-",
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    @classmethod
    def playing_ranks(cls) -> tuple["Rank", ...]:
        """The 13 ranks of a standard deck, Ace first."""
        return tuple(rank for rank in cls if rank is not cls.BLANK)

    def blackjack_value(self, soft: bool = True) -> int:
        """Return the point value; an Ace is 11 while soft, 1 once deflated."""
        if self is Rank.ACE:
            return 11 if soft else 1
        return min(self.value, 10)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self is Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.value >= 10


class DealerUpcardStrength(Enum):
    """Coarse classification of the dealer's upcard from the player's side."""

    GOOD = auto()
    FAIR = auto()
    POOR = auto()

    @classmethod
    def from_value(cls, value: int) -> "DealerUpcardStrength":
        if 2 <= value <= 3:
            return cls.FAIR
        if 4 <= value <= 6:
            return cls.POOR
        # 7-11 and a hard ace
        return cls.GOOD


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    ``soft`` only matters for aces: it starts True and flips to False once
    the containing hand would otherwise bust. The flip produces a new card
    via :meth:`deflated`; an existing card never changes.
    """

    rank: Rank
    suit: Suit = Suit.HEARTS
    soft: bool = True

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        soft = "" if self.soft else ", hard"
        return f"Card({self.rank.name}, {self.suit.name}{soft})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value(self.soft)

    @property
    def is_ace(self) -> bool:
        return self.rank.is_ace

    @property
    def is_soft_ace(self) -> bool:
        """An ace currently counted as 11."""
        return self.rank.is_ace and self.soft

    @property
    def is_ten_value(self) -> bool:
        return self.rank.is_ten_value

    @property
    def is_blank(self) -> bool:
        return self.rank is Rank.BLANK

    @property
    def upcard_strength(self) -> DealerUpcardStrength:
        """Strength of this card when it is the dealer's upcard."""
        return DealerUpcardStrength.from_value(self.value)

    def deflated(self) -> "Card":
        """Return the hard version of this card."""
        if not self.soft:
            return self
        return replace(self, soft=False)

    def inflated(self) -> "Card":
        """Return the soft version of this card."""
        if self.soft:
            return self
        return replace(self, soft=True)

    @classmethod
    def blank(cls) -> "Card":
        return cls(Rank.BLANK, Suit.HEARTS)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {str(rank): rank for rank in Rank.playing_ranks()}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


def standard_deck() -> list[Card]:
    """Return the 52 cards of one deck, ordered by suit then rank."""
    return [Card(rank, suit) for suit in Suit for rank in Rank.playing_ranks()]


class Shoe:
    """
    One or more merged decks, drawn from like a stack.

    The last position after shuffling is drawn first. With ``contains_blank``
    a single BLANK card is buried 59-69 cards from the bottom to act as the
    cut card. The shoe never refills itself; the engine decides what an
    empty shoe means.
    """

    def __init__(
        self,
        deck_count: int = 6,
        contains_blank: bool = False,
        rng: Random | None = None,
    ) -> None:
        """
        Build an ordered shoe.

        Args:
            deck_count: Number of 52-card decks merged into the shoe
            contains_blank: Whether rebuilds bury a cut card
            rng: Random number generator used when none is passed to
                shuffle/insert_blank
        """
        if deck_count < 1:
            raise ConfigurationError("Shoe must have at least 1 deck")

        self._deck_count = deck_count
        self._contains_blank = contains_blank
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset the shoe to every card of every deck, unshuffled."""
        self._cards = [
            card for _ in range(self._deck_count) for card in standard_deck()
        ]
        self._check_size(self.total_cards)

    def shuffle(self, rng: Random | None = None) -> None:
        """Shuffle the cards currently in the shoe uniformly at random."""
        (rng or self._rng).shuffle(self._cards)

    def insert_blank(self, rng: Random | None = None) -> None:
        """Bury the cut card 59-69 positions from the bottom of the stack."""
        offset = (rng or self._rng).randrange(BLANK_OFFSET_MIN, BLANK_OFFSET_MAX)
        self._cards.insert(min(offset, len(self._cards)), Card.blank())

    def rebuild(self, rng: Random | None = None) -> None:
        """Replace the contents with a freshly shuffled shoe."""
        self.reset()
        self.shuffle(rng)
        if self._contains_blank:
            self.insert_blank(rng)
        self._check_size(self.full_size)

    def draw(self) -> Card | None:
        """Pop the next card, or return None if the shoe is exhausted."""
        if not self._cards:
            return None
        return self._cards.pop()

    def _check_size(self, expected: int) -> None:
        if len(self._cards) != expected:
            raise InvariantViolation(
                f"Shoe holds {len(self._cards)} cards, expected {expected}"
            )

    @property
    def cards_remaining(self) -> int:
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the number of playing cards in a full shoe."""
        return self._deck_count * CARDS_PER_DECK

    @property
    def full_size(self) -> int:
        """Size right after a rebuild, cut card included."""
        return self.total_cards + (1 if self._contains_blank else 0)

    @property
    def deck_count(self) -> int:
        return self._deck_count

    @property
    def contains_blank(self) -> bool:
        return self._contains_blank

    @property
    def decks_remaining(self) -> float:
        """Return the estimated number of decks remaining."""
        return len(self._cards) / CARDS_PER_DECK

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
