"""Blackjack simulation engine - strategies in, statistics out."""

from bjsim.cards import Card, Rank, Shoe, Suit
from bjsim.hand import Hand, HandState
from bjsim.config import GameSettings, RunConfig
from bjsim.game import Game, Winner
from bjsim.simulation import GamePool, SimulationResults, simulate_parallel

__all__ = [
    "Card",
    "Game",
    "GamePool",
    "GameSettings",
    "Hand",
    "HandState",
    "Rank",
    "RunConfig",
    "Shoe",
    "SimulationResults",
    "Suit",
    "Winner",
    "simulate_parallel",
]
