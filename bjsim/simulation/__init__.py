"""Simulation runner and aggregated results."""

from bjsim.simulation.results import SimulationResults
from bjsim.simulation.pool import GamePool, simulate_parallel

__all__ = [
    "GamePool",
    "SimulationResults",
    "simulate_parallel",
]
