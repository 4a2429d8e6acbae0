"""Round phases and the read-only snapshot handed to strategies."""

from dataclasses import dataclass
from enum import Enum, auto

from bjsim.cards import Card, DealerUpcardStrength
from bjsim.game.outcome import Winner
from bjsim.hand import Hand


class RoundPhase(Enum):
    """
    Phases of the round state machine.

    Flow: WAITING_FOR_BET → DEALING → PLAYER_TURN → DEALER_TURN → RESOLVING
    → WAITING_FOR_BET
    """

    WAITING_FOR_BET = auto()
    DEALING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    RESOLVING = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class GameState:
    """
    Everything a strategy may look at when making one decision.

    Built fresh by the engine for every decision point. Hands are copies,
    so a strategy cannot reach back into the engine.
    """

    init_bet: int
    last_bet: int
    played_cards: tuple[Card, ...]
    dealer_upcard: Card | None
    dealer_upcard_strength: DealerUpcardStrength | None
    player_hand: Hand | None
    dealer_hand: Hand | None
    dealer_cutoff: int
    deck_count: int
    contains_blank: bool
    last_winner: Winner
    running_count: int
    true_count: float
    splits_remaining: int = 0
    allow_early_surrender: bool = False
    allow_late_surrender: bool = False

    @property
    def can_split(self) -> bool:
        """The acting hand is a pair and the table allows another split."""
        return (
            self.player_hand is not None
            and self.player_hand.is_pair
            and self.splits_remaining > 0
        )

    @property
    def dealer_upcard_value(self) -> int:
        """Upcard value with an ace counted as 11; 0 before the deal."""
        if self.dealer_upcard is None:
            return 0
        return self.dealer_upcard.rank.blackjack_value(soft=True)
