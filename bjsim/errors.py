"""Exception hierarchy for the simulator."""


class SimulationError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(SimulationError, ValueError):
    """Invalid settings, rejected before any round is played."""


class InvariantViolation(SimulationError, RuntimeError):
    """
    The engine reached a state it cannot recover from.

    Results gathered after this point would be wrong, so the error is never
    swallowed by the engine or the runner.
    """


class IllegalDecisionError(InvariantViolation):
    """A strategy returned a decision its seat is not allowed to make."""
