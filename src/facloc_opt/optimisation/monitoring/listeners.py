"""
Optimization listeners.

The optimizer reports to a single listener through three notifications:

- ``handle_algorithm(optimizer, problem_name, problem_type, obj_type)``
  before a trial, with the optimizer carrying the configuration in use
- ``handle_particle(best_particle, iteration)`` after every iteration, with
  the all-time best particle so far
- ``handle_results(results)`` after a trial, with its ProblemResults

Notifications are fire-and-forget: the optimizer ignores return values and
logs, rather than propagates, any exception a listener raises.
"""

import json
import logging
from typing import Any

from ...export.results_manager import ResultsExportManager

logger = logging.getLogger(__name__)


class BaseListener:
    """Listener that ignores every notification."""

    def handle_algorithm(self, optimizer, problem_name: str, problem_type, obj_type) -> None:
        pass

    def handle_particle(self, best_particle, iteration: int) -> None:
        pass

    def handle_results(self, results) -> None:
        pass


class LoggingListener(BaseListener):
    """
    Write optimization progress to the ``facloc_opt`` loggers.

    Args:
        progress_frequency: Log the all-time best every N iterations.
    """

    def __init__(self, progress_frequency: int = 10):
        if progress_frequency < 1:
            raise ValueError("Progress frequency must be positive")
        self.progress_frequency = progress_frequency

    def handle_algorithm(self, optimizer, problem_name, problem_type, obj_type):
        logger.info("🚀 %s (%s, %s) with %s",
                    problem_name, problem_type.value, obj_type.value, optimizer.get_json_parameters())

    def handle_particle(self, best_particle, iteration):
        if iteration % self.progress_frequency == 0:
            logger.info("   Iteration %d: best fitness = %.6f", iteration, best_particle.fitness)

    def handle_results(self, results):
        logger.info("✅ Best fitness %.6f in %.3fs", results.fitness, results.elapsed_time)


class ResultsRecorder(BaseListener):
    """
    Collect one row per trial for later export.

    Each row combines the configuration announced by ``handle_algorithm`` with
    the ProblemResults delivered by ``handle_results``. ``trial`` counts the
    consecutive trials run on the same problem with the same configuration,
    starting at 0.
    """

    def __init__(self):
        self.rows: list[dict[str, Any]] = []
        self._pending: dict[str, Any] | None = None
        self._last_key: tuple | None = None
        self._trial = 0

    def handle_algorithm(self, optimizer, problem_name, problem_type, obj_type):
        parameters = optimizer.get_json_parameters()
        key = (problem_name, problem_type, obj_type, parameters)
        if key == self._last_key:
            self._trial += 1
        else:
            self._trial = 0
            self._last_key = key

        params = json.loads(parameters)
        self._pending = {
            "problem_name": problem_name,
            "problem_type": problem_type.value,
            "obj_type": obj_type.value,
            "trial": self._trial,
            "inertia": params["inertia"],
            "cognitive": params["cognitive"],
            "social": params["social"],
            "inertial_discount": params["inertialDiscount"],
            "swarm_size": params["swarmSize"],
            "max_iterations": params["maxIterations"],
        }

    def handle_results(self, results):
        row = dict(self._pending or {})
        row.update(
            {
                "fitness": results.fitness,
                "elapsed_time": results.elapsed_time,
                "position": results.position.tolist(),
                "customer_assignments": results.customer_assignments.tolist(),
            }
        )
        self.rows.append(row)
        self._pending = None

    def export(self, csv_path: str) -> str:
        """Write the recorded rows to a CSV file."""
        return ResultsExportManager().export_rows(self.rows, csv_path)

    def __len__(self):
        return len(self.rows)


class ListenerCollection(BaseListener):
    """
    Wrapper that forwards every notification to several listeners.

    A listener that raises does not stop the others from being notified.
    """

    def __init__(self, listeners):
        super().__init__()
        self.listeners = list(listeners)

    def _forward(self, method: str, *args) -> None:
        for listener in self.listeners:
            try:
                getattr(listener, method)(*args)
            except Exception:
                logger.warning("Listener %s failed in %s", type(listener).__name__, method, exc_info=True)

    def handle_algorithm(self, optimizer, problem_name, problem_type, obj_type):
        self._forward("handle_algorithm", optimizer, problem_name, problem_type, obj_type)

    def handle_particle(self, best_particle, iteration):
        self._forward("handle_particle", best_particle, iteration)

    def handle_results(self, results):
        self._forward("handle_results", results)

    def __len__(self):
        return len(self.listeners)

    def __iter__(self):
        return iter(self.listeners)

    def __getitem__(self, index):
        return self.listeners[index]
