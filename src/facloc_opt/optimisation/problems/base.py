"""
Problem definition for facility location optimisation.

This module holds the immutable problem description consumed by the
optimizer: the customer×facility cost matrix together with the problem
variant and the direction of the objective.

Example:
    ```python
    data = ProblemData(
        costs=[[4, 1], [2, 6], [3, 3]],     # 3 customers, 2 facilities
        problem_type="uncapacitated",
        obj_type="minimize",
        name="toy",
    )
    print(data.num_customers, data.num_facilities)  # 3 2
    ```
"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..errors import UnsupportedObjectiveTypeError, UnsupportedProblemTypeError

logger = logging.getLogger(__name__)


class ObjectiveType(str, Enum):
    """Direction of optimisation."""

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"

    @classmethod
    def parse(cls, value) -> "ObjectiveType":
        """Coerce an enum member or a case-insensitive tag into an ObjectiveType."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedObjectiveTypeError(
            f"Unsupported objective type {value!r}; expected one of {[m.value for m in cls]}"
        )


class ProblemType(str, Enum):
    """Facility location problem variant."""

    UNCAPACITATED = "uncapacitated"
    CAPACITATED = "capacitated"

    @classmethod
    def parse(cls, value) -> "ProblemType":
        """Coerce an enum member or a case-insensitive tag into a ProblemType."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedProblemTypeError(
            f"Unsupported problem type {value!r}; expected one of {[m.value for m in cls]}"
        )


@dataclass(frozen=True, eq=False)
class ProblemData:
    """
    Immutable facility location problem instance.

    Attributes:
        costs (np.ndarray): Cost matrix of shape (n_customers, n_facilities).
                            ``costs[c, f]`` is the cost of serving customer ``c``
                            from facility ``f``. Stored as a read-only float array.
        problem_type (ProblemType): Problem variant (uncapacitated/capacitated).
        obj_type (ObjectiveType): Whether the total cost is minimized or maximized.
        name (str): Human readable identifier used in logs and exported results.
    """

    costs: np.ndarray
    problem_type: ProblemType = ProblemType.UNCAPACITATED
    obj_type: ObjectiveType = ObjectiveType.MINIMIZE
    name: str = "unnamed"

    def __post_init__(self):
        """Validate the cost matrix and normalise type tags."""
        try:
            costs = np.array(self.costs, dtype=float)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Cost matrix must be numeric: {e}") from e

        if costs.ndim != 2:
            raise ValueError(f"Cost matrix must be 2-dimensional, got {costs.ndim} dimension(s)")
        if costs.shape[0] < 1 or costs.shape[1] < 1:
            raise ValueError("Cost matrix must contain at least one customer and one facility")
        if not np.all(np.isfinite(costs)):
            raise ValueError("Cost matrix entries must be finite")

        costs.setflags(write=False)
        object.__setattr__(self, "costs", costs)
        object.__setattr__(self, "problem_type", ProblemType.parse(self.problem_type))
        object.__setattr__(self, "obj_type", ObjectiveType.parse(self.obj_type))

    @property
    def num_customers(self) -> int:
        return int(self.costs.shape[0])

    @property
    def num_facilities(self) -> int:
        return int(self.costs.shape[1])

    def summary(self) -> str:
        """Return a one-line description for logging."""
        return (
            f"{self.name}: {self.num_customers} customers × {self.num_facilities} facilities "
            f"({self.problem_type.value}, {self.obj_type.value})"
        )
