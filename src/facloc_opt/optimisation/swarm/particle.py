"""
Velocity-free particle for discrete facility location PSO.

A particle's position holds one integer level per facility, drawn from
``range(domain_size)``. Level 0 means closed; any positive level means open
(and, for capacitated problems, is the facility's capacity in customers).

Instead of a velocity, ``update`` applies three probabilistic moves to every
dimension, one per PSO coefficient:

1. **inertia**   - redraw the dimension at random (exploration, fades as the
                   optimizer decays its inertia)
2. **cognitive** - copy the value from the particle's personal best
3. **social**    - copy the value from the swarm's global best

The particle reads the coefficients, random generator, comparator and
scoring functions from its owner (the optimizer), so all particles move with
the same, current settings.
"""

import numpy as np


class Particle:
    """
    One candidate solution of the swarm.

    Attributes:
        position (np.ndarray): Facility levels, shape (num_dimensions,).
        fitness (float): Objective value of ``position``.
        best_position (np.ndarray): Best position this particle has visited.
        best_fitness (float): Objective value of ``best_position``.

    Args:
        num_dimensions: Number of facilities.
        domain_size: Number of candidate levels per facility.
        owner: Optimizer exposing ``rng``, ``inertia``, ``cognitive``, ``social``,
               ``comparator``, ``calc_objective`` and ``assign``.
    """

    def __init__(self, num_dimensions: int, domain_size: int, owner):
        if num_dimensions < 1:
            raise ValueError("Particle needs at least one dimension")
        if domain_size < 1:
            raise ValueError("Particle domain must contain at least one value")

        self.num_dimensions = num_dimensions
        self.domain_size = domain_size
        self.owner = owner

        self.position = owner.rng.integers(0, domain_size, size=num_dimensions)
        self.fitness = owner.calc_objective(self.position)
        self.best_position = self.position.copy()
        self.best_fitness = self.fitness

    def update(self, global_best: "Particle") -> None:
        """Move towards the personal and global bests and re-score the position."""
        owner = self.owner
        position = self.position.copy()

        position = self._perturb(position, owner.inertia)
        position = self._move_towards(position, self.best_position, owner.cognitive)
        position = self._move_towards(position, global_best.position, owner.social)

        self.position = position
        self.fitness = owner.calc_objective(position)

        if owner.comparator.prefers(self.fitness, self.best_fitness):
            self.best_position = position.copy()
            self.best_fitness = self.fitness

    def _perturb(self, position: np.ndarray, prob: float) -> np.ndarray:
        mask = self.owner.rng.random(self.num_dimensions) < prob
        if np.any(mask):
            position[mask] = self.owner.rng.integers(0, self.domain_size, size=int(mask.sum()))
        return position

    def _move_towards(self, position: np.ndarray, target: np.ndarray, prob: float) -> np.ndarray:
        mask = self.owner.rng.random(self.num_dimensions) < prob
        position[mask] = target[mask]
        return position

    def get_customer_assignments(self) -> np.ndarray:
        """Recompute the customer→facility assignment for the current position."""
        return self.owner.assign(self.position)

    def copy(self) -> "Particle":
        """Return an independent snapshot that shares only the owner."""
        clone = Particle.__new__(Particle)
        clone.num_dimensions = self.num_dimensions
        clone.domain_size = self.domain_size
        clone.owner = self.owner
        clone.position = self.position.copy()
        clone.fitness = self.fitness
        clone.best_position = self.best_position.copy()
        clone.best_fitness = self.best_fitness
        return clone

    def __repr__(self) -> str:
        return f"Particle(fitness={self.fitness}, position={self.position.tolist()})"
