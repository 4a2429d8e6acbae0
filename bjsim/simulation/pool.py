"""Drive many rounds through one engine, or many engines in parallel."""

import logging
import multiprocessing
import os

from bjsim.config import GameSettings
from bjsim.errors import ConfigurationError
from bjsim.game import EventEmitter, EventType, Game
from bjsim.simulation.results import SimulationResults

logger = logging.getLogger(__name__)

# Seeds of parallel batches are spaced by this prime
SEED_STRIDE = 7919


class GamePool:
    """
    Plays rounds back to back on a single engine.

    The shoe, count and last outcome carry over from round to round.
    ``cancel()`` may be called from an event handler or a signal handler;
    the run stops once the current round is resolved.
    """

    def __init__(
        self,
        settings: GameSettings,
        events: EventEmitter | None = None,
    ) -> None:
        self.settings = settings
        self.events = events or EventEmitter()
        self.game = Game.from_settings(settings, events=self.events)
        self._cancelled = False

    def cancel(self) -> None:
        """Stop after the round in progress."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def simulate(self, rounds: int) -> SimulationResults:
        """Play ``rounds`` rounds and return their results."""
        if rounds < 0:
            raise ConfigurationError("rounds cannot be negative")

        self._cancelled = False
        results = SimulationResults()
        logger.info(
            "Simulating %d rounds: play=%s bet=%s count=%s",
            rounds,
            self.settings.player_play_strategy,
            self.settings.bet_strategy,
            self.settings.counting,
        )

        for _ in range(rounds):
            if self._cancelled:
                results.cancelled = True
                logger.info("Simulation cancelled after %d rounds", results.rounds)
                self.events.emit_new(
                    EventType.SIMULATION_CANCELLED, rounds=results.rounds
                )
                break

            bet = self.game.place_round_bet()
            self.game.deal(bet)
            results.add_round(self.game.play_hand())
            self.game.reset_hands()

        logger.info(
            "Finished %d rounds, payoff %s", results.rounds, results.payoff
        )
        return results


def _simulate_batch(settings: GameSettings, rounds: int) -> SimulationResults:
    return GamePool(settings).simulate(rounds)


def _split_rounds(rounds: int, batches: int) -> list[int]:
    base, extra = divmod(rounds, batches)
    return [base + (1 if i < extra else 0) for i in range(batches)]


def simulate_parallel(
    settings: GameSettings,
    rounds: int,
    workers: int | None = None,
) -> SimulationResults:
    """
    Split ``rounds`` across worker processes and merge the results.

    Every batch gets its own engine and random stream. With a seed, batch
    ``i`` uses ``seed + i * SEED_STRIDE`` so a run is repeatable for a
    given worker count; a single worker reproduces ``GamePool(settings)``.
    """
    if rounds < 0:
        raise ConfigurationError("rounds cannot be negative")
    workers = workers or os.cpu_count() or 1
    if workers < 1:
        raise ConfigurationError("workers must be at least 1")
    workers = max(1, min(workers, rounds))

    jobs = []
    for i, batch in enumerate(_split_rounds(rounds, workers)):
        seed = None if settings.seed is None else settings.seed + i * SEED_STRIDE
        jobs.append((settings.with_seed(seed), batch))

    logger.info("Running %d rounds on %d workers", rounds, len(jobs))
    if len(jobs) == 1:
        batches = [_simulate_batch(*jobs[0])]
    else:
        with multiprocessing.Pool(processes=len(jobs)) as pool:
            batches = pool.starmap(_simulate_batch, jobs)

    return sum(batches, SimulationResults())
