"""
Tests for particles and the swarm.

Particles are exercised against a real NDPSO owner bound to a small problem,
so scoring and assignment go through the same code paths as optimization.
"""

import numpy as np
import pytest

from facloc_opt.optimisation.config import PSOConfig
from facloc_opt.optimisation.runners import NDPSO
from facloc_opt.optimisation.swarm import Particle, Swarm


def bound_optimizer(data, **config):
    """Optimizer with ``data`` bound, as it is during a run."""
    optimizer = NDPSO(PSOConfig(**config), seed=123)
    optimizer.data = data
    optimizer.comparator.set_type(data.obj_type)
    return optimizer


class TestParticle:
    """Test particle initialization and movement."""

    def test_initial_position_in_domain(self, medium_problem):
        owner = bound_optimizer(medium_problem)
        for _ in range(10):
            particle = Particle(medium_problem.num_facilities, medium_problem.num_customers, owner)
            assert particle.position.shape == (medium_problem.num_facilities,)
            assert particle.position.min() >= 0
            assert particle.position.max() < medium_problem.num_customers
        print("✅ Initial positions drawn from the facility level domain")

    def test_initial_fitness_and_personal_best(self, small_problem):
        owner = bound_optimizer(small_problem)
        particle = Particle(2, 3, owner)
        assert particle.fitness == owner.calc_objective(particle.position)
        assert np.array_equal(particle.best_position, particle.position)
        assert particle.best_fitness == particle.fitness

    def test_invalid_sizes_rejected(self, small_problem):
        owner = bound_optimizer(small_problem)
        with pytest.raises(ValueError):
            Particle(0, 3, owner)
        with pytest.raises(ValueError):
            Particle(2, 0, owner)

    def test_no_move_with_zero_coefficients(self, medium_problem):
        owner = bound_optimizer(medium_problem, inertia=0.0, cognitive=0.0, social=0.0)
        particle = Particle(medium_problem.num_facilities, medium_problem.num_customers, owner)
        other = Particle(medium_problem.num_facilities, medium_problem.num_customers, owner)
        before = particle.position.copy()
        particle.update(other)
        assert np.array_equal(particle.position, before)
        print("✅ Zero coefficients leave the particle in place")

    def test_full_social_copies_global_best(self, medium_problem):
        owner = bound_optimizer(medium_problem, inertia=0.0, cognitive=0.0, social=1.0)
        particle = Particle(medium_problem.num_facilities, medium_problem.num_customers, owner)
        leader = Particle(medium_problem.num_facilities, medium_problem.num_customers, owner)
        particle.update(leader)
        assert np.array_equal(particle.position, leader.position)
        assert particle.fitness == pytest.approx(leader.fitness)
        print("✅ Social probability 1 copies the global best")

    def test_update_does_not_touch_global_best(self, medium_problem):
        owner = bound_optimizer(medium_problem, inertia=1.0, cognitive=0.5, social=0.5)
        particle = Particle(medium_problem.num_facilities, medium_problem.num_customers, owner)
        leader = Particle(medium_problem.num_facilities, medium_problem.num_customers, owner)
        snapshot = leader.position.copy()
        particle.update(leader)
        assert np.array_equal(leader.position, snapshot)

    def test_personal_best_never_worsens(self, medium_problem):
        owner = bound_optimizer(medium_problem, inertia=0.9, cognitive=0.3, social=0.3)
        particle = Particle(medium_problem.num_facilities, medium_problem.num_customers, owner)
        leader = particle.copy()
        history = [particle.best_fitness]
        for _ in range(30):
            particle.update(leader)
            history.append(particle.best_fitness)
            assert particle.best_fitness <= particle.fitness
        assert all(b <= a for a, b in zip(history, history[1:]))
        print("✅ Personal best is monotone under minimize")

    def test_customer_assignments(self, small_problem):
        owner = bound_optimizer(small_problem)
        particle = Particle(2, 3, owner)
        particle.position = np.array([1, 1])
        assert particle.get_customer_assignments().tolist() == [1, 0, 0]

    def test_copy_is_independent(self, small_problem):
        owner = bound_optimizer(small_problem)
        particle = Particle(2, 3, owner)
        clone = particle.copy()
        clone.position[0] = 99
        assert particle.position[0] != 99
        assert clone.owner is owner


class TestSwarm:
    """Test swarm lifecycle."""

    def test_initialize_creates_requested_size(self, small_problem):
        owner = bound_optimizer(small_problem)
        swarm = Swarm()
        swarm.initialize(7, 2, 3, owner)
        assert len(swarm) == 7
        assert all(isinstance(p, Particle) for p in swarm)
        print("✅ Swarm initialised with requested size")

    def test_reinitialize_replaces_particles(self, small_problem):
        owner = bound_optimizer(small_problem)
        swarm = Swarm()
        swarm.initialize(5, 2, 3, owner)
        first = swarm[0]
        swarm.initialize(3, 2, 3, owner)
        assert len(swarm) == 3
        assert all(p is not first for p in swarm)

    def test_zero_size_rejected(self, small_problem):
        with pytest.raises(ValueError):
            Swarm().initialize(0, 2, 3, bound_optimizer(small_problem))

    def test_best_and_worst(self, medium_problem):
        owner = bound_optimizer(medium_problem)
        swarm = Swarm()
        swarm.initialize(10, medium_problem.num_facilities, medium_problem.num_customers, owner)
        fitnesses = [p.fitness for p in swarm]
        assert swarm.best("minimize").fitness == min(fitnesses)
        assert swarm.worst("minimize").fitness == max(fitnesses)
        assert swarm.best("maximize").fitness == max(fitnesses)
        print("✅ Swarm best/worst follow the objective direction")


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
