"""Insurance strategies."""

from bjsim.game.state import GameState
from bjsim.strategy.base import InsuranceStrategy


class NoInsurance(InsuranceStrategy):
    """Always decline insurance."""

    name = "No Insurance"

    def insure(self, state: GameState) -> bool:
        return False


class CountInsurance(InsuranceStrategy):
    """Take insurance once the true count reaches the index (Hi-Lo: +3)."""

    name = "Count Insurance"

    def __init__(self, index: float = 3.0) -> None:
        self.index = index

    def insure(self, state: GameState) -> bool:
        return state.true_count >= self.index

    def __repr__(self) -> str:
        return f"CountInsurance(index={self.index})"
