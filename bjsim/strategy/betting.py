"""Bet sizing strategies."""

from bjsim.game.outcome import Winner
from bjsim.game.state import GameState
from bjsim.strategy.base import BetStrategy


class ConstantBet(BetStrategy):
    """Always wager the table's initial bet."""

    name = "Constant Bet"

    def bet(self, state: GameState) -> int:
        return state.init_bet


class Martingale(BetStrategy):
    """
    Double after a loss so the next win covers every previous loss.

    Resets to the initial bet after a win and repeats the last bet after
    a tie. The first round of a run bets the initial bet.
    """

    name = "Martingale"

    def bet(self, state: GameState) -> int:
        if state.last_winner is Winner.DEALER:
            return state.last_bet * 2
        if state.last_winner is Winner.TIE:
            return state.last_bet
        return state.init_bet


class CountSpreadBet(BetStrategy):
    """
    Bet ramp driven by the true count.

    One unit at a true count of 1 or less, then one unit per point of true
    count up to ``spread`` units.
    """

    name = "Count Spread"
    requires_count = True

    def __init__(self, spread: int = 8) -> None:
        if spread < 1:
            raise ValueError("spread must be at least 1")
        self.spread = spread

    def bet(self, state: GameState) -> int:
        if state.true_count <= 1:
            multiplier = 1
        else:
            multiplier = min(int(state.true_count), self.spread)
        return state.init_bet * multiplier

    def __repr__(self) -> str:
        return f"CountSpreadBet(spread={self.spread})"
