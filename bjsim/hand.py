"""Hand state and value computation."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator

from bjsim.cards import Card, Rank

BLACKJACK = 21


class HandState(Enum):
    """Lifecycle of a single hand."""

    INIT = auto()  # not dealt yet
    PLAYING = auto()
    EARLY_SURRENDER = auto()  # forfeit before the dealer checks for a natural
    LATE_SURRENDER = auto()
    FINISHED = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not HandState.INIT and self is not HandState.PLAYING


@dataclass(eq=False)
class Hand:
    """
    A blackjack hand owned by the player or the dealer.

    Hands compare by identity: two hands holding the same cards are still
    different seats at the table.
    """

    cards: list[Card] = field(default_factory=list)
    state: HandState = HandState.INIT
    init_bet: int = 10
    doubled: bool = False
    natural: bool = False
    split_child: bool = False
    insured: bool = False

    @classmethod
    def from_cards(
        cls,
        cards: list[Card],
        init_bet: int = 10,
        *,
        doubled: bool = False,
        natural: bool = False,
        split_child: bool = False,
    ) -> "Hand":
        """Build a hand that is already in play, normalising soft aces."""
        hand = cls(
            init_bet=init_bet,
            state=HandState.PLAYING,
            doubled=doubled,
            natural=natural,
            split_child=split_child,
        )
        for card in cards:
            hand.add_card(card)
        return hand

    def add_card(self, card: Card) -> None:
        """
        Add a card, deflating soft aces one at a time while over 21.

        A hand over 21 without a soft ace is left as is; busting is decided
        at resolution. A third card ends any natural.
        """
        self.cards.append(card)
        if len(self.cards) > 2:
            self.natural = False
        while self.value > BLACKJACK and self.contains_soft_ace:
            self.deflate_ace()

    def deflate_ace(self) -> None:
        """Count the first soft ace as 1. No-op when every ace is hard."""
        for i, card in enumerate(self.cards):
            if card.is_soft_ace:
                self.cards[i] = card.deflated()
                return

    def set_state(self, state: HandState) -> None:
        self.state = state

    def copy(self) -> "Hand":
        """Return an independent copy; cards are immutable and shared."""
        return Hand(
            cards=list(self.cards),
            state=self.state,
            init_bet=self.init_bet,
            doubled=self.doubled,
            natural=self.natural,
            split_child=self.split_child,
            insured=self.insured,
        )

    def clear(self) -> None:
        self.cards.clear()
        self.state = HandState.INIT
        self.doubled = False
        self.natural = False
        self.split_child = False
        self.insured = False

    @property
    def value(self) -> int:
        return sum(card.value for card in self.cards)

    @property
    def contains_soft_ace(self) -> bool:
        """True if an ace in the hand is currently counted as 11."""
        return any(card.is_soft_ace for card in self.cards)

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a pair (two cards of same rank)."""
        return len(self.cards) == 2 and self.cards[0].rank == self.cards[1].rank

    def is_pair_of(self, rank: Rank) -> bool:
        return self.is_pair and self.cards[0].rank == rank

    @property
    def can_double(self) -> bool:
        return len(self.cards) == 2 and not self.doubled

    @property
    def is_natural_candidate(self) -> bool:
        """Two untouched cards totalling 21, not produced by a split."""
        return (
            len(self.cards) == 2
            and not self.split_child
            and self.value == BLACKJACK
        )

    @property
    def is_busted(self) -> bool:
        return self.value > BLACKJACK

    @property
    def is_surrendered(self) -> bool:
        return self.state in (HandState.EARLY_SURRENDER, HandState.LATE_SURRENDER)

    @property
    def is_finished(self) -> bool:
        return self.state is HandState.FINISHED or self.is_surrendered

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.contains_soft_ace:
            value_str = f"(soft {self.value})"
        if self.natural:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value}, state={self.state.name})"
