"""Error types raised by the optimisation engine."""


class FacilityOptError(Exception):
    """Base class for facility location optimisation errors."""


class UnsupportedObjectiveTypeError(FacilityOptError, ValueError):
    """Raised when an objective direction is neither minimize nor maximize."""


class UnsupportedProblemTypeError(FacilityOptError, ValueError):
    """Raised when a problem variant has no assignment strategy."""


class EmptySwarmError(FacilityOptError, RuntimeError):
    """Raised when a best/worst particle is requested from an empty swarm."""
