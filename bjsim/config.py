"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field, replace
from random import Random

from bjsim.counting import COUNTING_SYSTEMS, CountingSystem, HiLoSystem, NoCountSystem
from bjsim.errors import ConfigurationError
from bjsim.strategy import (
    BET_STRATEGIES,
    INSURANCE_STRATEGIES,
    PLAY_STRATEGIES,
    BasicStrategy,
    BetStrategy,
    ConstantBet,
    DealerHardCutoff,
    InsuranceStrategy,
    NoInsurance,
    PlayStrategy,
)

MAX_DECKS = 8


def _env_int(name: str, default: int | None) -> int | None:
    """Parse an integer environment variable, keeping ``default`` when unset."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _lookup(registry: dict[str, type], kind: str, name: str):
    try:
        return registry[name]
    except KeyError:
        known = ", ".join(sorted(registry))
        raise ConfigurationError(f"Unknown {kind} {name!r} (known: {known})") from None


@dataclass(frozen=True)
class GameSettings:
    """
    Everything needed to build one engine.

    Validated on construction so that a bad table never reaches the first
    round.
    """

    deck_count: int = 6
    contains_blank: bool = True
    max_splits: int = 3
    init_bet: int = 10
    dealer_cutoff: int = 17
    dealer_play_strategy: PlayStrategy = field(default_factory=DealerHardCutoff)
    player_play_strategy: PlayStrategy = field(default_factory=BasicStrategy)
    bet_strategy: BetStrategy = field(default_factory=ConstantBet)
    count_strategy: CountingSystem | None = field(default_factory=HiLoSystem)
    insurance_strategy: InsuranceStrategy = field(default_factory=NoInsurance)
    allow_early_surrender: bool = False
    allow_late_surrender: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.deck_count < 1:
            raise ConfigurationError("deck_count must be at least 1")
        if self.deck_count > MAX_DECKS:
            raise ConfigurationError(f"deck_count must be at most {MAX_DECKS}")
        if self.max_splits < 0:
            raise ConfigurationError("max_splits cannot be negative")
        if self.init_bet <= 0:
            raise ConfigurationError("init_bet must be positive")
        if not 2 <= self.dealer_cutoff <= 21:
            raise ConfigurationError("dealer_cutoff must be between 2 and 21")
        if self.bet_strategy.requires_count and not self.counting.tracks_count:
            raise ConfigurationError(
                f"{self.bet_strategy} needs a counting system"
            )

    @property
    def counting(self) -> CountingSystem:
        """The counting system, a zero-tag one when counting is off."""
        if self.count_strategy is None:
            return NoCountSystem()
        return self.count_strategy

    def make_rng(self) -> Random:
        """A fresh random source; seeded runs repeat exactly."""
        return Random(self.seed)

    def with_seed(self, seed: int | None) -> "GameSettings":
        return replace(self, seed=seed)

    @classmethod
    def from_names(
        cls,
        play: str = "basic",
        dealer: str = "dealer-hard-cutoff",
        bet: str = "constant",
        count: str | None = "hi-lo",
        insurance: str = "none",
        **options,
    ) -> "GameSettings":
        """
        Build settings from registry names, as a CLI would.

        Args:
            play: Key of ``PLAY_STRATEGIES`` for the player
            dealer: Key of ``PLAY_STRATEGIES`` for the dealer
            bet: Key of ``BET_STRATEGIES``
            count: Key of ``COUNTING_SYSTEMS``, or None for no counting
            insurance: Key of ``INSURANCE_STRATEGIES``
            **options: Any other ``GameSettings`` field
        """
        return cls(
            player_play_strategy=_lookup(PLAY_STRATEGIES, "play strategy", play)(),
            dealer_play_strategy=_lookup(PLAY_STRATEGIES, "dealer strategy", dealer)(),
            bet_strategy=_lookup(BET_STRATEGIES, "bet strategy", bet)(),
            count_strategy=(
                _lookup(COUNTING_SYSTEMS, "counting system", count)()
                if count is not None
                else None
            ),
            insurance_strategy=_lookup(
                INSURANCE_STRATEGIES, "insurance strategy", insurance
            )(),
            **options,
        )

    @classmethod
    def six_deck_basic(cls, seed: int | None = None) -> "GameSettings":
        """Six decks, cut card, basic strategy, flat bets."""
        return cls(seed=seed)

    @classmethod
    def single_deck(cls, seed: int | None = None) -> "GameSettings":
        """Single deck, no cut card, full chart play with late surrender."""
        return cls.from_names(
            play="chart",
            deck_count=1,
            contains_blank=False,
            allow_late_surrender=True,
            seed=seed,
        )


@dataclass(frozen=True)
class RunConfig:
    """Run-level defaults for the surrounding CLI/reporting layer."""

    rounds: int = field(
        default_factory=lambda: _env_int("BJSIM_ROUNDS", 100_000)
    )
    workers: int = field(
        default_factory=lambda: _env_int("BJSIM_WORKERS", os.cpu_count() or 1)
    )
    seed: int | None = field(default_factory=lambda: _env_int("BJSIM_SEED", None))
    log_level: str = field(
        default_factory=lambda: os.getenv("BJSIM_LOG_LEVEL", "WARNING").upper()
    )

    def __post_init__(self) -> None:
        if self.rounds < 0:
            raise ConfigurationError("rounds cannot be negative")
        if self.workers < 1:
            raise ConfigurationError("workers must be at least 1")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Unknown log level {self.log_level!r}")

    def apply_logging(self) -> logging.Logger:
        """Set the package logger to ``log_level`` and return it."""
        logger = logging.getLogger("bjsim")
        logger.setLevel(self.log_level)
        return logger
