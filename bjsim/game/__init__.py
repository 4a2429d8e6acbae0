"""Round engine: snapshots, outcomes, events and the Game itself."""

# Snapshot and outcome modules load before the engine, which pulls in the
# strategy ports that annotate against them.
from bjsim.game.state import GameState, RoundPhase
from bjsim.game.outcome import EndState, Winner, resolve_hand, round_winner
from bjsim.game.events import EventEmitter, EventType, GameEvent
from bjsim.game.engine import Dealer, Game, Player

__all__ = [
    "Dealer",
    "EndState",
    "EventEmitter",
    "EventType",
    "Game",
    "GameEvent",
    "GameState",
    "Player",
    "RoundPhase",
    "Winner",
    "resolve_hand",
    "round_winner",
]
