"""Test fixtures for facility location optimisation tests."""

import numpy as np
import pytest

from facloc_opt.optimisation.problems.base import ProblemData
from facloc_opt.preprocessing.prepare_problem import generate_problem_data


@pytest.fixture
def small_problem():
    """
    Three customers, two candidate facilities.

    Cost matrix (rows = customers, columns = facilities):

        f0  f1
    c0   4   1
    c1   2   6
    c2   3   3

    With both facilities open the nearest assignment is [1, 0, 0] (cost 6).
    Only f0 open costs 9, only f1 open costs 10.
    """
    return ProblemData(costs=[[4, 1], [2, 6], [3, 3]], name="small")


@pytest.fixture
def small_maximize_problem():
    """Same matrix as small_problem with the objective maximized."""
    return ProblemData(costs=[[4, 1], [2, 6], [3, 3]], obj_type="maximize", name="small_max")


@pytest.fixture
def medium_problem():
    """Random 20 customer × 8 facility problem with a fixed seed."""
    return generate_problem_data(20, 8, seed=7, name="medium")


@pytest.fixture
def capacitated_problem():
    """Random capacitated 12 × 4 problem."""
    return generate_problem_data(12, 4, seed=3, problem_type="capacitated", name="capacitated")


@pytest.fixture
def tiny_problem():
    """Smallest useful instance, for tests that run many optimizations."""
    return ProblemData(costs=np.array([[1.0, 2.0], [2.0, 1.0]]), name="tiny")


@pytest.fixture
def base_config_dict():
    """Minimal valid configuration dictionary."""
    return {
        "problem": {
            "generate": {"customers": 6, "facilities": 3, "seed": 1},
            "type": "uncapacitated",
            "objective": "minimize",
        },
        "optimization": {
            "algorithm": {
                "type": "NDPSO",
                "swarm_size": 5,
                "inertia": 0.8,
                "cognitive": 0.4,
                "social": 0.6,
                "inertial_discount": 0.95,
                "seed": 11,
            },
            "termination": {"max_iterations": 4},
        },
    }
