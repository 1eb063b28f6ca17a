from .base import BaseObjective, TotalCostObjective, calc_objective

__all__ = ["BaseObjective",
           "TotalCostObjective",
           "calc_objective"]
