"""Wong Halves card counting system."""

from typing import Mapping

from bjsim.cards import Rank
from bjsim.counting.base import CountingSystem


class WongHalvesSystem(CountingSystem):
    """
    Wong Halves counting system, doubled to whole numbers.

    The published tags are halves (5: +1.5, 2 and 7: +0.5, ...). The running
    count is an integer, so every tag is doubled; divide the true count by
    two to compare against published Wong Halves indices.

    Tag values:
        5: +3
        3, 4, 6: +2
        2, 7: +1
        8: 0
        9: -1
        10-K, A: -2
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        Rank.TWO: 1,
        Rank.THREE: 2,
        Rank.FOUR: 2,
        Rank.FIVE: 3,
        Rank.SIX: 2,
        Rank.SEVEN: 1,
        Rank.EIGHT: 0,
        Rank.NINE: -1,
        Rank.TEN: -2,
        Rank.JACK: -2,
        Rank.QUEEN: -2,
        Rank.KING: -2,
        Rank.ACE: -2,
    }

    @property
    def name(self) -> str:
        return "Wong Halves (Doubled)"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES

    @property
    def is_balanced(self) -> bool:
        return True
