import logging

from ..errors import EmptySwarmError
from ..problems.base import ObjectiveType
from .comparator import Comparator
from .particle import Particle

logger = logging.getLogger(__name__)


def select_extremal(particles, obj_type: ObjectiveType | str, worst: bool = False) -> Particle:
    """
    Return a copy of the best (or worst) particle in the swarm.

    The whole swarm is scanned with a strict comparison, so the first of
    several equally fit particles wins.

    Args:
        particles: Iterable of Particle
        obj_type: Objective direction deciding what "best" means
        worst: Select the least preferred particle instead

    Raises:
        EmptySwarmError: If there are no particles
        UnsupportedObjectiveTypeError: If obj_type is not recognised
    """
    comparator = Comparator(obj_type)

    chosen = None
    for particle in particles:
        if chosen is None:
            chosen = particle
        elif worst and comparator.prefers(chosen.fitness, particle.fitness):
            chosen = particle
        elif not worst and comparator.prefers(particle.fitness, chosen.fitness):
            chosen = particle

    if chosen is None:
        raise EmptySwarmError("Cannot select a particle from an empty swarm")
    return chosen.copy()


class Swarm:
    """Ordered, fixed-size collection of particles owned by one optimizer."""

    def __init__(self):
        self.particles: list[Particle] = []

    def initialize(self, size: int, num_dimensions: int, domain_size: int, owner) -> None:
        """Discard the current particles and create ``size`` fresh random ones."""
        if size < 1:
            raise ValueError(f"Swarm size must be positive, got {size}")

        self.particles.clear()
        for _ in range(size):
            self.particles.append(Particle(num_dimensions, domain_size, owner))

        logger.debug("Initialised swarm of %d particles (%d dimensions, domain %d)",
                     size, num_dimensions, domain_size)

    def best(self, obj_type: ObjectiveType | str) -> Particle:
        return select_extremal(self.particles, obj_type)

    def worst(self, obj_type: ObjectiveType | str) -> Particle:
        return select_extremal(self.particles, obj_type, worst=True)

    def __len__(self):
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def __getitem__(self, index):
        return self.particles[index]
