"""
Customer assignment strategies.

An assignment strategy turns a particle position (one level per facility)
into a concrete customer→facility assignment. Facilities with level > 0 are
open; for capacitated problems the level is also the number of customers the
facility may serve.

Strategies are a small closed set selected by ``ProblemType``:

- ``UNCAPACITATED`` → NearestFacilityAssignment
- ``CAPACITATED``   → CapacitatedGreedyAssignment

Both are deterministic: the same (costs, facilities) always yields the same
assignment, so results only need to store the position.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from ..errors import UnsupportedProblemTypeError
from .base import ProblemType

logger = logging.getLogger(__name__)


def open_facilities(facilities: np.ndarray) -> np.ndarray:
    """
    Return the indices of open facilities.

    When no facility is open every facility is treated as open, so an
    assignment always exists.
    """
    facilities = np.asarray(facilities)
    opened = np.flatnonzero(facilities > 0)
    if opened.size == 0:
        return np.arange(facilities.size)
    return opened


class BaseAssignmentStrategy(ABC):
    """Base class for customer assignment strategies."""

    @abstractmethod
    def assign(self, costs: np.ndarray, facilities: np.ndarray) -> np.ndarray:
        """Return the facility index serving each customer."""
        pass

    @staticmethod
    def _validate(costs: np.ndarray, facilities: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        costs = np.asarray(costs, dtype=float)
        facilities = np.asarray(facilities)
        if costs.ndim != 2:
            raise ValueError("Cost matrix must be 2-dimensional")
        if facilities.shape != (costs.shape[1],):
            raise ValueError(
                f"Facility vector has shape {facilities.shape}, expected ({costs.shape[1]},)"
            )
        return costs, facilities


class NearestFacilityAssignment(BaseAssignmentStrategy):
    """Assign every customer to its cheapest open facility (lowest index on ties)."""

    def assign(self, costs: np.ndarray, facilities: np.ndarray) -> np.ndarray:
        costs, facilities = self._validate(costs, facilities)
        opened = open_facilities(facilities)
        return opened[np.argmin(costs[:, opened], axis=1)]


class CapacitatedGreedyAssignment(BaseAssignmentStrategy):
    """
    Greedy capacity-respecting assignment.

    (customer, facility) pairs are visited in ascending cost order and a pair
    is accepted while the customer is unassigned and the facility still has
    capacity. Customers left over once capacity runs out overflow to their
    nearest open facility.
    """

    def assign(self, costs: np.ndarray, facilities: np.ndarray) -> np.ndarray:
        costs, facilities = self._validate(costs, facilities)
        opened = open_facilities(facilities)
        sub_costs = costs[:, opened]

        if not np.any(facilities > 0):
            # Nothing open: fall back to the uncapacitated rule.
            return opened[np.argmin(sub_costs, axis=1)]

        n_customers = costs.shape[0]
        remaining = facilities[opened].astype(int).copy()
        assignment = np.full(n_customers, -1, dtype=int)

        order = np.argsort(sub_costs, axis=None, kind="stable")
        customers, columns = np.unravel_index(order, sub_costs.shape)
        unassigned = n_customers
        for customer, column in zip(customers, columns):
            if assignment[customer] >= 0 or remaining[column] <= 0:
                continue
            assignment[customer] = opened[column]
            remaining[column] -= 1
            unassigned -= 1
            if unassigned == 0:
                break

        overflow = assignment < 0
        if np.any(overflow):
            logger.debug("%d customer(s) exceed open capacity, assigning to nearest", int(overflow.sum()))
            assignment[overflow] = opened[np.argmin(sub_costs[overflow], axis=1)]

        return assignment


ASSIGNMENT_STRATEGIES: dict[ProblemType, BaseAssignmentStrategy] = {
    ProblemType.UNCAPACITATED: NearestFacilityAssignment(),
    ProblemType.CAPACITATED: CapacitatedGreedyAssignment(),
}


def get_assignment_strategy(problem_type) -> BaseAssignmentStrategy:
    """Look up the assignment strategy for a problem variant."""
    try:
        return ASSIGNMENT_STRATEGIES[ProblemType.parse(problem_type)]
    except KeyError:
        raise UnsupportedProblemTypeError(f"No assignment strategy for problem type {problem_type!r}")


def assign(costs: np.ndarray, facilities: np.ndarray, problem_type) -> np.ndarray:
    """
    Assign customers to facilities for the given problem variant.

    Args:
        costs: Cost matrix of shape (n_customers, n_facilities)
        facilities: Facility levels of shape (n_facilities,)
        problem_type: ProblemType or its string tag

    Returns:
        np.ndarray: Facility index for each customer, shape (n_customers,)

    Raises:
        UnsupportedProblemTypeError: If problem_type is not recognised
    """
    return get_assignment_strategy(problem_type).assign(costs, facilities)
