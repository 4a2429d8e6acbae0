"""Abstract base class for card counting systems."""

from abc import ABC, abstractmethod
from typing import Mapping

from bjsim.cards import Card, Rank


class CountingSystem(ABC):
    """
    A card counting system.

    Systems are stateless tag tables: :meth:`count` maps one card to its
    signed running-count delta. The engine owns the running count itself,
    so a single instance can be shared by every simulation.
    """

    #: False for systems whose count carries no information
    tracks_count = True

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the counting system."""
        ...

    @property
    @abstractmethod
    def tag_values(self) -> Mapping[Rank, int]:
        """Return the tag value for every playing rank."""
        ...

    @property
    @abstractmethod
    def is_balanced(self) -> bool:
        """
        Return whether this is a balanced counting system.

        A balanced system sums to 0 over a complete deck.
        """
        ...

    @property
    def full_deck_sum(self) -> int:
        """Sum of tag values over one 52-card deck (each rank appears 4 times)."""
        return sum(self.tag_values[rank] * 4 for rank in Rank.playing_ranks())

    def count(self, card: Card) -> int:
        """Return the running-count delta for a card. The cut card counts 0."""
        if card.is_blank:
            return 0
        return self.tag_values[card.rank]

    def __call__(self, card: Card) -> int:
        return self.count(card)

    def initial_running_count(self, deck_count: int) -> int:
        """Running count at the top of a fresh shoe."""
        return 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
