"""Card counting systems."""

from bjsim.counting.base import CountingSystem
from bjsim.counting.hilo import HiLoSystem
from bjsim.counting.ko import KOSystem
from bjsim.counting.none import NoCountSystem
from bjsim.counting.omega2 import Omega2System
from bjsim.counting.wong_halves import WongHalvesSystem

COUNTING_SYSTEMS: dict[str, type[CountingSystem]] = {
    "hi-lo": HiLoSystem,
    "ko": KOSystem,
    "omega-2": Omega2System,
    "wong-halves": WongHalvesSystem,
    "none": NoCountSystem,
}

__all__ = [
    "CountingSystem",
    "HiLoSystem",
    "KOSystem",
    "NoCountSystem",
    "Omega2System",
    "WongHalvesSystem",
    "COUNTING_SYSTEMS",
]
