"""Omega II card counting system."""

from typing import Mapping

from bjsim.cards import Rank
from bjsim.counting.base import CountingSystem


class Omega2System(CountingSystem):
    """
    Omega II counting system.

    A multi-level balanced system; aces are neutral.

    Tag values:
        4, 5, 6: +2
        2, 3, 7: +1
        8, A: 0
        9: -1
        10-K: -2
    """

    _TAG_VALUES: Mapping[Rank, int] = {
        Rank.TWO: 1,
        Rank.THREE: 1,
        Rank.FOUR: 2,
        Rank.FIVE: 2,
        Rank.SIX: 2,
        Rank.SEVEN: 1,
        Rank.EIGHT: 0,
        Rank.NINE: -1,
        Rank.TEN: -2,
        Rank.JACK: -2,
        Rank.QUEEN: -2,
        Rank.KING: -2,
        Rank.ACE: 0,
    }

    @property
    def name(self) -> str:
        return "Omega II"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES

    @property
    def is_balanced(self) -> bool:
        return True
