"""
Discrete PSO (NDPSO) runner for facility location.

This module provides the optimization engine itself:

- Swarm lifecycle (fresh random swarm for every run)
- Fixed-iteration PSO loop with a velocity-free particle update
- Global-best / all-time-best tracking under minimize or maximize
- Inertia decay, reset at the start of every run
- A systematic inertia × cognitive × social parameter sweep with repeated
  trials, used to tune the algorithm empirically

Usage:
```python
from facloc_opt.optimisation.config import PSOConfig
from facloc_opt.optimisation.runners import NDPSO

optimizer = NDPSO(PSOConfig(swarm_size=20, max_iterations=100), seed=42)
result = optimizer.optimize(problem_data)

print(f"Best fitness: {result.fitness}")
print(f"Open facilities: {result.position}")
print(f"Optimization time: {result.elapsed_time}s")
```
"""

import json
import logging
import time
from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from ..config.config_manager import SWEEP_VALUES, PSOConfig
from ..monitoring.listeners import BaseListener
from ..objectives.base import calc_objective
from ..problems.assignment import assign
from ..problems.base import ObjectiveType, ProblemData, ProblemType
from ..swarm.comparator import Comparator
from ..swarm.particle import Particle
from ..swarm.swarm import Swarm, select_extremal

logger = logging.getLogger(__name__)


@dataclass
class ProblemResults:
    """
    Result of one optimization run.

    The record is self-describing: it carries the problem variant and
    objective direction it was produced under, so it can be interpreted
    without the full ProblemData.

    Attributes:
        elapsed_time (float): Wall-clock seconds spent in the PSO loop.
        fitness (float): Best objective value found during the run.
        position (np.ndarray): Facility levels of the best particle.
        customer_assignments (np.ndarray): Facility index serving each customer.
                                           Recomputed from ``position`` when the
                                           run ends rather than tracked during it.
        problem_type (ProblemType): Problem variant of the run.
        obj_type (ObjectiveType): Objective direction of the run.
    """

    elapsed_time: float
    fitness: float
    position: np.ndarray
    customer_assignments: np.ndarray
    problem_type: ProblemType
    obj_type: ObjectiveType

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation."""
        return {
            "elapsed_time": float(self.elapsed_time),
            "fitness": float(self.fitness),
            "position": [int(v) for v in self.position],
            "customer_assignments": [int(v) for v in self.customer_assignments],
            "problem_type": self.problem_type.value,
            "obj_type": self.obj_type.value,
        }


class NDPSO:
    """
    Velocity-free discrete particle swarm optimizer.

    The optimizer owns the swarm and exposes the context particles read while
    moving: the coefficients, the current (decayed) inertia, the random
    generator, the comparator and the scoring functions of the active problem.

    Configuration is an immutable PSOConfig snapshot. Setters replace the
    snapshot instead of mutating it, and ``optimize`` may be handed a snapshot
    for one run, so no trial can change the settings another trial sees. The
    working ``inertia`` is the only coefficient that changes during a run and
    it is reset to ``config.inertia`` whenever a run starts.

    Attributes:
        config (PSOConfig): Active configuration snapshot.
        inertia (float): Working inertia, decayed once per iteration.
        data (ProblemData | None): Problem of the current/last run.
        comparator (Comparator): Direction of the current/last run.
        swarm (Swarm): Particles of the current/last run.
        rng (np.random.Generator): Source of all randomness. Not reseeded
                                   between runs, so repeated trials differ while
                                   a seeded optimizer stays reproducible.
        listener (BaseListener): Receiver of progress and result notifications.

    Example Usage:
        ```python
        recorder = ResultsRecorder()
        optimizer = NDPSO(PSOConfig(swarm_size=10, max_iterations=20),
                          listener=recorder, seed=1)
        optimizer.search_parameters(problem_data)   # 1250 trials
        recorder.export("sweep.csv")
        ```
    """

    def __init__(
        self,
        config: PSOConfig | None = None,
        listener: BaseListener | None = None,
        seed: int | None = None,
    ):
        self.config = config if config is not None else PSOConfig()
        self.inertia = self.config.inertia
        self.listener = listener if listener is not None else BaseListener()
        self.rng = np.random.default_rng(seed)

        self.data: ProblemData | None = None
        self.comparator = Comparator()
        self.swarm = Swarm()

    # ---------------------------------------------------------------- config

    @property
    def social(self) -> float:
        return self.config.social

    @property
    def cognitive(self) -> float:
        return self.config.cognitive

    @property
    def initial_inertia(self) -> float:
        return self.config.inertia

    @property
    def inertial_discount(self) -> float:
        return self.config.inertial_discount

    @property
    def swarm_size(self) -> int:
        return self.config.swarm_size

    @property
    def max_iterations(self) -> int:
        return self.config.max_iterations

    def set_config(self, config: PSOConfig) -> None:
        self.config = config
        self.inertia = config.inertia

    def set_inertia(self, inertia: float) -> None:
        self.set_config(replace(self.config, inertia=inertia))

    def set_cognitive(self, cognitive: float) -> None:
        self.set_config(replace(self.config, cognitive=cognitive))

    def set_social(self, social: float) -> None:
        self.set_config(replace(self.config, social=social))

    def get_json_parameters(self) -> str:
        """
        Serialise the configuration for logging and reproducibility records.

        ``inertia`` is the configured starting value, not the decayed one.

        Returns:
            str: JSON object with keys inertia, cognitive, social,
                 inertialDiscount, swarmSize, maxIterations (in that order)
        """
        return json.dumps(
            {
                "inertia": self.config.inertia,
                "cognitive": self.config.cognitive,
                "social": self.config.social,
                "inertialDiscount": self.config.inertial_discount,
                "swarmSize": self.config.swarm_size,
                "maxIterations": self.config.max_iterations,
            }
        )

    # --------------------------------------------------------------- problem

    def _require_data(self) -> ProblemData:
        if self.data is None:
            raise RuntimeError("No problem bound to the optimizer; call optimize() first")
        return self.data

    def assign(self, facilities: np.ndarray) -> np.ndarray:
        """Customer assignment for a facility vector of the bound problem."""
        data = self._require_data()
        return assign(data.costs, facilities, data.problem_type)

    def calc_objective(self, facilities: np.ndarray) -> float:
        """
        Objective value of a facility vector alone.

        Derives the customer assignment first and then scores it, for use
        wherever only a position (not a full particle) is available.
        """
        data = self._require_data()
        return calc_objective(data.costs, self.assign(facilities), data.obj_type)

    # ----------------------------------------------------------------- swarm

    def init_swarm(self) -> None:
        """Replace the swarm with ``swarm_size`` randomly positioned particles."""
        data = self._require_data()
        self.swarm.initialize(
            size=self.config.swarm_size,
            num_dimensions=data.num_facilities,
            domain_size=data.num_customers,
            owner=self,
        )

    def get_global_best(self) -> Particle:
        """Copy of the best particle currently in the swarm."""
        return select_extremal(self.swarm, self._require_data().obj_type)

    def get_global_worst(self) -> Particle:
        """Copy of the worst particle currently in the swarm."""
        return select_extremal(self.swarm, self._require_data().obj_type, worst=True)

    # ------------------------------------------------------------- listeners

    def _notify(self, method: str, *args) -> None:
        try:
            getattr(self.listener, method)(*args)
        except Exception:
            logger.warning("Listener %s failed in %s; continuing",
                           type(self.listener).__name__, method, exc_info=True)

    # -------------------------------------------------------------- optimize

    def optimize(self, data: ProblemData, config: PSOConfig | None = None) -> ProblemResults:
        """
        Run one fixed-length PSO optimization.

        EXECUTION WORKFLOW:
        1. **Setup**: bind data, configure comparator, build a fresh swarm,
           take its best as both the global and the all-time best, reset
           inertia to its configured starting value
        2. **Iterate** ``max_iterations`` times:
           - decay inertia (so iteration 1 already uses a discounted value)
           - move every particle against the same global-best snapshot
           - recompute the global best once all particles have moved
           - keep a copy of it as the all-time best when strictly preferred
           - notify ``handle_particle(all_time_best, iteration)``
        3. **Finish**: recompute the best particle's customer assignment and
           package the result

        Args:
            data: Problem to optimize
            config: Optional configuration snapshot; when given it replaces
                    the optimizer's configuration

        Returns:
            ProblemResults: Best fitness/position/assignment and elapsed time
        """
        if config is not None:
            self.set_config(config)

        # Setup
        self.data = data
        self.comparator.set_type(data.obj_type)
        self.init_swarm()
        global_best = self.get_global_best()
        all_time_best = global_best

        self.inertia = self.config.inertia

        logger.debug("Starting NDPSO on %s with %s", data.summary(), self.get_json_parameters())
        start_time = time.time()

        for count in range(1, self.config.max_iterations + 1):
            self.inertia *= self.config.inertial_discount

            for particle in self.swarm:
                particle.update(global_best)

            global_best = self.get_global_best()
            if self.comparator.prefers(global_best.fitness, all_time_best.fitness):
                all_time_best = global_best

            self._notify("handle_particle", all_time_best, count)

        elapsed_time = time.time() - start_time

        return ProblemResults(
            elapsed_time=elapsed_time,
            fitness=all_time_best.fitness,
            position=all_time_best.position.copy(),
            customer_assignments=all_time_best.get_customer_assignments(),
            problem_type=data.problem_type,
            obj_type=data.obj_type,
        )

    # ----------------------------------------------------------------- sweep

    def search_parameters(
        self,
        data: ProblemData,
        values: tuple[float, ...] | None = None,
        trials: int = 10,
        isolate_failures: bool = False,
    ) -> int:
        """
        Grid search over inertia × cognitive × social with repeated trials.

        Every (inertia, cognitive, social) triple drawn from ``values`` is
        visited once, in that loop order, and optimized ``trials`` times with
        a fresh swarm each time. Before each trial the listener receives
        ``handle_algorithm`` and afterwards ``handle_results``. With default
        arguments this is 125 grid points and 1250 trials.

        The optimizer is left holding the last grid point's configuration,
        not the best one. Results are only delivered through the listener.

        Args:
            data: Problem to optimize
            values: Coefficient values per axis (default 0.1, 0.3, 0.5, 0.7, 0.9)
            trials: Independent trials per grid point
            isolate_failures: Log and skip a failing trial instead of halting

        Returns:
            int: Number of trials that completed
        """
        values = tuple(values) if values is not None else SWEEP_VALUES
        if not values:
            raise ValueError("Parameter sweep needs at least one coefficient value")
        if trials < 1:
            raise ValueError("Trials per grid point must be positive")

        total = len(values) ** 3 * trials
        logger.info("🔄 STARTING PARAMETER SWEEP on %s (%d grid points × %d trials = %d runs)",
                    data.name, len(values) ** 3, trials, total)

        done = 0
        failed = 0
        for inertia in values:
            for cognitive in values:
                for social in values:
                    self.set_config(replace(self.config, inertia=inertia, cognitive=cognitive, social=social))
                    for _ in range(trials):
                        self._notify("handle_algorithm", self, data.name, data.problem_type, data.obj_type)
                        try:
                            results = self.optimize(data)
                        except Exception:
                            if not isolate_failures:
                                raise
                            failed += 1
                            logger.error("❌ Trial failed with %s", self.get_json_parameters(), exc_info=True)
                            continue
                        self._notify("handle_results", results)
                        done += 1
                    logger.info("%d done", done)

        logger.info("🎯 PARAMETER SWEEP COMPLETED: %d/%d trials (%d failed)", done, total, failed)
        return done
