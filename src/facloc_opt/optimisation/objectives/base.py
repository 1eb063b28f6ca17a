import logging
from abc import ABC, abstractmethod

import numpy as np

from ..problems.base import ObjectiveType

logger = logging.getLogger(__name__)


class BaseObjective(ABC):
    """Base class for all assignment objectives."""

    @abstractmethod
    def evaluate(self, costs: np.ndarray, assignment: np.ndarray) -> float:
        """Evaluate objective for a given customer assignment."""
        pass


class TotalCostObjective(BaseObjective):
    """
    Total cost of serving every customer from its assigned facility.

    Under MINIMIZE this is the classic median objective (cheapest total
    service). Under MAXIMIZE the same quantity is pushed upwards, which gives
    the obnoxious/dispersion variant: customers as far as possible from their
    nearest open facility.

    Example:
        ```python
        costs = np.array([[4, 1], [2, 6], [3, 3]])
        TotalCostObjective().evaluate(costs, np.array([1, 0, 0]))  # 1 + 2 + 3 = 6.0
        ```
    """

    def evaluate(self, costs: np.ndarray, assignment: np.ndarray) -> float:
        costs = np.asarray(costs, dtype=float)
        assignment = np.asarray(assignment, dtype=int)
        if assignment.shape != (costs.shape[0],):
            raise ValueError(
                f"Assignment has shape {assignment.shape}, expected ({costs.shape[0]},)"
            )
        return float(costs[np.arange(costs.shape[0]), assignment].sum())


OBJECTIVES: dict[ObjectiveType, BaseObjective] = {
    ObjectiveType.MINIMIZE: TotalCostObjective(),
    ObjectiveType.MAXIMIZE: TotalCostObjective(),
}


def calc_objective(costs: np.ndarray, assignment: np.ndarray, obj_type) -> float:
    """
    Score a customer assignment.

    Args:
        costs: Cost matrix of shape (n_customers, n_facilities)
        assignment: Facility index for each customer
        obj_type: ObjectiveType or its string tag

    Returns:
        float: Objective value (direction given by obj_type)

    Raises:
        UnsupportedObjectiveTypeError: If obj_type is not recognised
    """
    return OBJECTIVES[ObjectiveType.parse(obj_type)].evaluate(costs, assignment)
