"""A counting system that tracks nothing."""

from typing import Mapping

from bjsim.cards import Rank
from bjsim.counting.base import CountingSystem


class NoCountSystem(CountingSystem):
    """Every card tags 0, so the running and true counts stay at zero."""

    _TAG_VALUES: Mapping[Rank, int] = {rank: 0 for rank in Rank.playing_ranks()}

    tracks_count = False

    @property
    def name(self) -> str:
        return "No Count"

    @property
    def tag_values(self) -> Mapping[Rank, int]:
        return self._TAG_VALUES

    @property
    def is_balanced(self) -> bool:
        return True
