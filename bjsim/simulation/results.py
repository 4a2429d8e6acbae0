"""Aggregated outcome statistics for a batch of rounds."""

from dataclasses import dataclass, field
from decimal import Decimal

from bjsim.game.outcome import EndState, Winner

HandResult = tuple[Winner, EndState]


@dataclass
class SimulationResults:
    """
    Per-hand ``(Winner, EndState)`` records and the statistics derived from
    them.

    Counts and rates are per resolved hand (a split round contributes one
    record per hand); per-round figures divide by ``rounds``.
    """

    results: list[HandResult] = field(default_factory=list)
    rounds: int = 0
    cancelled: bool = False

    def add_round(self, results: list[HandResult]) -> None:
        self.results.extend(results)
        self.rounds += 1

    @property
    def hands(self) -> int:
        return len(self.results)

    def _count(self, winner: Winner) -> int:
        return sum(1 for w, _ in self.results if w is winner)

    @property
    def player_wins(self) -> int:
        return self._count(Winner.PLAYER)

    @property
    def dealer_wins(self) -> int:
        return self._count(Winner.DEALER)

    @property
    def ties(self) -> int:
        return self._count(Winner.TIE)

    def _rate(self, count: int) -> float:
        return count / self.hands if self.hands else 0.0

    @property
    def win_rate(self) -> float:
        return self._rate(self.player_wins)

    @property
    def loss_rate(self) -> float:
        return self._rate(self.dealer_wins)

    @property
    def tie_rate(self) -> float:
        return self._rate(self.ties)

    @property
    def naturals(self) -> int:
        return sum(1 for _, end in self.results if end.p_natural)

    @property
    def surrenders(self) -> int:
        return sum(1 for _, end in self.results if end.p_surrendered)

    @property
    def busts(self) -> int:
        return sum(1 for _, end in self.results if end.p_bust)

    @property
    def bust_rate(self) -> float:
        """Share of player hands that went over 21."""
        return self._rate(self.busts)

    @property
    def bust_rate_given_loss(self) -> float:
        """Share of lost hands that were lost by busting."""
        losses = self.dealer_wins
        return self.busts / losses if losses else 0.0

    @property
    def total_wagered(self) -> Decimal:
        """Main-hand stakes, doubles counted twice."""
        return sum(
            (Decimal(end.hand_bet) * (2 if end.p_doubled else 1) for _, end in self.results),
            Decimal("0"),
        )

    @property
    def payoff(self) -> Decimal:
        """Net result for the player over every hand."""
        return sum(
            (end.payoff(winner) for winner, end in self.results),
            Decimal("0"),
        )

    @property
    def payoff_per_round(self) -> Decimal:
        if not self.rounds:
            return Decimal("0")
        return self.payoff / self.rounds

    def merge(self, other: "SimulationResults") -> "SimulationResults":
        """Combine two independent batches."""
        return SimulationResults(
            results=self.results + other.results,
            rounds=self.rounds + other.rounds,
            cancelled=self.cancelled or other.cancelled,
        )

    def __add__(self, other: "SimulationResults") -> "SimulationResults":
        if not isinstance(other, SimulationResults):
            return NotImplemented
        return self.merge(other)

    def summary(self) -> dict[str, object]:
        """Headline numbers, ready for a reporting layer to format."""
        return {
            "rounds": self.rounds,
            "hands": self.hands,
            "player_wins": self.player_wins,
            "dealer_wins": self.dealer_wins,
            "ties": self.ties,
            "win_rate": self.win_rate,
            "payoff": self.payoff,
            "payoff_per_round": self.payoff_per_round,
            "bust_rate": self.bust_rate,
            "bust_rate_given_loss": self.bust_rate_given_loss,
            "cancelled": self.cancelled,
        }
