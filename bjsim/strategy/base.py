"""Decision ports: play, bet, and insurance strategies."""

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bjsim.game.state import GameState


class PlayerDecision(Enum):
    """Possible actions for a hand."""

    HIT = auto()
    STAND = auto()
    DOUBLE = auto()
    SPLIT = auto()
    EARLY_SURRENDER = auto()
    LATE_SURRENDER = auto()

    @property
    def is_surrender(self) -> bool:
        return self in (PlayerDecision.EARLY_SURRENDER, PlayerDecision.LATE_SURRENDER)

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


DEALER_DECISIONS = frozenset({PlayerDecision.HIT, PlayerDecision.STAND})


class PlayStrategy(ABC):
    """Chooses the next action for the acting hand."""

    name: str = "play"

    @abstractmethod
    def decide(self, state: "GameState") -> PlayerDecision:
        ...

    def __call__(self, state: "GameState") -> PlayerDecision:
        return self.decide(state)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class BetStrategy(ABC):
    """Chooses the stake for the next round."""

    name: str = "bet"

    # True if the strategy reads the running/true count
    requires_count: bool = False

    @abstractmethod
    def bet(self, state: "GameState") -> int:
        ...

    def __call__(self, state: "GameState") -> int:
        return self.bet(state)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class InsuranceStrategy(ABC):
    """Decides whether to take insurance against a dealer ace."""

    name: str = "insurance"

    @abstractmethod
    def insure(self, state: "GameState") -> bool:
        ...

    def __call__(self, state: "GameState") -> bool:
        return self.insure(state)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
