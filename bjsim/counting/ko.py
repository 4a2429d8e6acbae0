"""Knock-Out (KO) card counting system."""

from typing import Mapping

from bjsim.cards import Rank
from bjsim.counting.base import CountingSystem


class KOSystem(CountingSystem):
    """
    Knock-Out (KO) counting system.

    Unbalanced: like Hi-Lo but the 7 counts +1.

    Tag values:
        2-7: +1
        8-9: 0
        10-A: -1

    Full deck sum: +4
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 1,
        Rank.FIVE: 1,
        Rank.SIX: 1,
        Rank.SEVEN: 1,
        Rank.EIGHT: 0,
        Rank.NINE: 0,
        Rank.TEN: -1,
        Rank.JACK: -1,
        Rank.QUEEN: -1,
        Rank.KING: -1,
        Rank.ACE: -1,
    }

    @property
    def name(self) -> str:
        return "Knock-Out (KO)"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES

    @property
    def is_balanced(self) -> bool:
        return False

    def initial_running_count(self, deck_count: int) -> int:
        """
        The textbook IRC, ``4 - 4 * decks``, which puts the key count at 0.

        The engine starts every shoe at zero; this is informational for
        bet strategies that want the KO pivot.
        """
        return 4 - (4 * deck_count)
