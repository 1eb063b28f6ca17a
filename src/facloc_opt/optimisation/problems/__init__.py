from .assignment import (
    BaseAssignmentStrategy,
    CapacitatedGreedyAssignment,
    NearestFacilityAssignment,
    assign,
    get_assignment_strategy,
    open_facilities,
)
from .base import ObjectiveType, ProblemData, ProblemType

__all__ = [
    "ObjectiveType",
    "ProblemData",
    "ProblemType",
    "BaseAssignmentStrategy",
    "NearestFacilityAssignment",
    "CapacitatedGreedyAssignment",
    "assign",
    "get_assignment_strategy",
    "open_facilities",
]
