"""
Problem data preparation.

Thin loaders that turn files into ProblemData, plus a random instance
generator for demos and tests.

Supported inputs:
- YAML documents with ``name``, ``type``, ``objective`` and ``costs``
  (a list of rows, one per customer)
- CSV cost matrices (comma separated, one row per customer); type and
  objective come from the arguments
"""

import logging
from pathlib import Path

import numpy as np
import yaml

from facloc_opt.optimisation.problems.base import ObjectiveType, ProblemData, ProblemType

logger = logging.getLogger(__name__)


def load_problem_data(
    path: str,
    problem_type: ProblemType | str | None = None,
    obj_type: ObjectiveType | str | None = None,
    name: str | None = None,
) -> ProblemData:
    """
    Load a problem instance from a YAML or CSV file.

    Args:
        path: Path to a ``.yaml``/``.yml`` or ``.csv`` file
        problem_type: Overrides the file's ``type`` (default uncapacitated)
        obj_type: Overrides the file's ``objective`` (default minimize)
        name: Overrides the file's ``name`` (default: file stem)

    Returns:
        ProblemData: Validated, immutable problem

    Raises:
        FileNotFoundError: If path doesn't exist
        ValueError: If the suffix is unsupported or the content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Problem file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        with open(path) as f:
            document = yaml.safe_load(f)
        if not isinstance(document, dict) or "costs" not in document:
            raise ValueError(f"Problem file {path} must be a mapping with a 'costs' entry")
        costs = document["costs"]
    elif suffix == ".csv":
        document = {}
        costs = np.loadtxt(path, delimiter=",", ndmin=2)
    else:
        raise ValueError(f"Unsupported problem file format '{suffix}' (expected .yaml, .yml or .csv)")

    data = ProblemData(
        costs=costs,
        problem_type=problem_type or document.get("type", ProblemType.UNCAPACITATED),
        obj_type=obj_type or document.get("objective", ObjectiveType.MINIMIZE),
        name=name or document.get("name", path.stem),
    )
    logger.info("📂 Loaded problem %s", data.summary())
    return data


def generate_problem_data(
    num_customers: int,
    num_facilities: int,
    seed: int | None = None,
    low: int = 1,
    high: int = 100,
    problem_type: ProblemType | str = ProblemType.UNCAPACITATED,
    obj_type: ObjectiveType | str = ObjectiveType.MINIMIZE,
    name: str | None = None,
) -> ProblemData:
    """Generate a random integer cost matrix in ``[low, high]``."""
    if num_customers < 1 or num_facilities < 1:
        raise ValueError("Need at least one customer and one facility")
    if low > high:
        raise ValueError("low must not exceed high")

    rng = np.random.default_rng(seed)
    costs = rng.integers(low, high, size=(num_customers, num_facilities), endpoint=True)
    return ProblemData(
        costs=costs,
        problem_type=problem_type,
        obj_type=obj_type,
        name=name or f"random_{num_customers}x{num_facilities}",
    )


def save_problem_data(data: ProblemData, path: str) -> str:
    """Write a problem as a YAML document readable by load_problem_data."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    document = {
        "name": data.name,
        "type": data.problem_type.value,
        "objective": data.obj_type.value,
        "costs": data.costs.tolist(),
    }
    with open(path, "w") as f:
        yaml.safe_dump(document, f, sort_keys=False)
    logger.info("💾 Saved problem %s to %s", data.name, path)
    return str(path)
