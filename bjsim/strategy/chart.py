"""Full table-driven basic strategy."""

from typing import Mapping

from bjsim.game.state import GameState
from bjsim.strategy.base import PlayerDecision, PlayStrategy
from bjsim.strategy.play import acting_hand, surrender_kind

# Dealer upcard columns: 2, 3, 4, 5, 6, 7, 8, 9, 10, A(11)
UPCARDS = (2, 3, 4, 5, 6, 7, 8, 9, 10, 11)

# Cell codes:
#   H  hit              S  stand
#   Dh double or hit    Ds double or stand
#   Rh surrender or hit Rs surrender or stand   Rp surrender or split
#   P  split            Ph split with double-after-split, else hit
Chart = Mapping[int, Mapping[int, str]]


def _chart(rows: Mapping[int, str]) -> dict[int, dict[int, str]]:
    table: dict[int, dict[int, str]] = {}
    for total, row in rows.items():
        cells = row.split()
        if len(cells) != len(UPCARDS):
            raise ValueError(f"Chart row {total} has {len(cells)} cells")
        table[total] = dict(zip(UPCARDS, cells))
    return table


HARD = _chart({
    8: "H  H  H  H  H  H  H  H  H  H",
    9: "H  Dh Dh Dh Dh H  H  H  H  H",
    10: "Dh Dh Dh Dh Dh Dh Dh Dh H  H",
    11: "Dh Dh Dh Dh Dh Dh Dh Dh Dh Dh",
    12: "H  H  S  S  S  H  H  H  H  H",
    13: "S  S  S  S  S  H  H  H  H  H",
    14: "S  S  S  S  S  H  H  H  H  H",
    15: "S  S  S  S  S  H  H  H  Rh H",
    16: "S  S  S  S  S  H  H  Rh Rh Rh",
    17: "S  S  S  S  S  S  S  S  S  S",
})

SOFT = _chart({
    13: "H  H  H  Dh Dh H  H  H  H  H",
    14: "H  H  H  Dh Dh H  H  H  H  H",
    15: "H  H  Dh Dh Dh H  H  H  H  H",
    16: "H  H  Dh Dh Dh H  H  H  H  H",
    17: "H  Dh Dh Dh Dh H  H  H  H  H",
    18: "Ds Ds Ds Ds Ds S  S  H  H  H",
    19: "S  S  S  S  S  S  S  S  S  S",
    20: "S  S  S  S  S  S  S  S  S  S",
    21: "S  S  S  S  S  S  S  S  S  S",
})

# Keyed by the value of one card of the pair (Ace = 11). Fives play as hard 10.
PAIRS = _chart({
    2: "Ph Ph P  P  P  P  H  H  H  H",
    3: "Ph Ph P  P  P  P  H  H  H  H",
    4: "H  H  H  Ph Ph H  H  H  H  H",
    6: "Ph P  P  P  P  H  H  H  H  H",
    7: "P  P  P  P  P  P  H  H  H  H",
    8: "P  P  P  P  P  P  P  P  P  P",
    9: "P  P  P  P  P  S  P  P  S  S",
    10: "S  S  S  S  S  S  S  S  S  S",
    11: "P  P  P  P  P  P  P  P  P  P",
})

# Hit-soft-17 tables change a few cells
H17_OVERRIDES: Mapping[str, Mapping[tuple[int, int], str]] = {
    "hard": {(15, 11): "Rh"},
    "soft": {(19, 6): "Ds"},
    "pairs": {(8, 10): "Rp", (8, 11): "Rp"},
}


class ChartStrategy(PlayStrategy):
    """
    Basic strategy looked up from hard, soft and pair charts.

    Charts assume the dealer stands on soft 17 unless ``dealer_hits_soft_17``
    is set. Conditional cells fall back when the hand cannot double or the
    table does not offer surrender.
    """

    name = "Chart Basic Strategy"

    def __init__(
        self,
        dealer_hits_soft_17: bool = False,
        double_after_split: bool = True,
    ) -> None:
        self.dealer_hits_soft_17 = dealer_hits_soft_17
        self.double_after_split = double_after_split
        self._hard = self._with_overrides(HARD, "hard")
        self._soft = self._with_overrides(SOFT, "soft")
        self._pairs = self._with_overrides(PAIRS, "pairs")

    def _with_overrides(self, chart: Chart, kind: str) -> dict[int, dict[int, str]]:
        table = {total: dict(row) for total, row in chart.items()}
        if self.dealer_hits_soft_17:
            for (total, upcard), cell in H17_OVERRIDES[kind].items():
                table[total][upcard] = cell
        return table

    def decide(self, state: GameState) -> PlayerDecision:
        hand = acting_hand(state)
        upcard = state.dealer_upcard_value

        if state.can_split:
            pair_value = hand.cards[0].rank.blackjack_value(soft=True)
            cell = self._pairs.get(pair_value, {}).get(upcard)
            if cell is not None:
                return self._resolve(cell, state)

        return self._resolve(self.lookup(hand.value, upcard, hand.contains_soft_ace), state)

    def lookup(self, total: int, upcard: int, soft: bool = False) -> str:
        """Return the raw chart cell for a non-pair total."""
        if soft and total in self._soft:
            return self._soft[total][upcard]
        if soft and total < min(self._soft):
            return "H"
        if total >= 17:
            return "S"
        if total <= 8:
            return "H"
        return self._hard[total][upcard]

    def _resolve(self, cell: str, state: GameState) -> PlayerDecision:
        """Turn a chart cell into an action the hand can actually take."""
        hand = acting_hand(state)

        if cell == "H":
            return PlayerDecision.HIT
        if cell == "S":
            return PlayerDecision.STAND
        if cell == "P":
            return PlayerDecision.SPLIT
        if cell == "Ph":
            return PlayerDecision.SPLIT if self.double_after_split else PlayerDecision.HIT
        if cell in ("Dh", "Ds"):
            if hand.can_double:
                return PlayerDecision.DOUBLE
            return PlayerDecision.HIT if cell == "Dh" else PlayerDecision.STAND
        if cell in ("Rh", "Rs", "Rp"):
            surrender = surrender_kind(state)
            if surrender is not None:
                return surrender
            if cell == "Rp":
                return PlayerDecision.SPLIT
            return PlayerDecision.HIT if cell == "Rh" else PlayerDecision.STAND

        raise ValueError(f"Unknown chart cell: {cell}")
