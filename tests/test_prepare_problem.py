"""
Tests for problem loading, generation and saving.
"""

import numpy as np
import pytest

from facloc_opt.optimisation.errors import UnsupportedProblemTypeError
from facloc_opt.optimisation.problems import ObjectiveType, ProblemType
from facloc_opt.preprocessing import generate_problem_data, load_problem_data, save_problem_data


class TestLoadProblemData:
    """Test loading problems from disk."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "toy.yaml"
        path.write_text(
            "name: toy\n"
            "type: capacitated\n"
            "objective: maximize\n"
            "costs:\n"
            "  - [4, 1]\n"
            "  - [2, 6]\n"
            "  - [3, 3]\n"
        )
        data = load_problem_data(str(path))
        assert data.name == "toy"
        assert data.problem_type is ProblemType.CAPACITATED
        assert data.obj_type is ObjectiveType.MAXIMIZE
        assert data.costs.shape == (3, 2)
        print("✅ YAML problem loaded")

    def test_load_csv_with_overrides(self, tmp_path):
        path = tmp_path / "matrix.csv"
        path.write_text("4,1\n2,6\n3,3\n")
        data = load_problem_data(str(path), obj_type="maximize")
        assert data.name == "matrix"
        assert data.problem_type is ProblemType.UNCAPACITATED
        assert data.obj_type is ObjectiveType.MAXIMIZE
        assert data.costs[1, 1] == 6.0
        print("✅ CSV problem loaded with type overrides")

    def test_single_row_csv_stays_2d(self, tmp_path):
        path = tmp_path / "one.csv"
        path.write_text("5,7,9\n")
        assert load_problem_data(str(path)).costs.shape == (1, 3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_problem_data(str(tmp_path / "nope.yaml"))

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "problem.txt"
        path.write_text("1,2\n")
        with pytest.raises(ValueError, match="Unsupported"):
            load_problem_data(str(path))

    def test_yaml_without_costs(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: bad\n")
        with pytest.raises(ValueError, match="costs"):
            load_problem_data(str(path))

    def test_unknown_type_in_file(self, tmp_path):
        path = tmp_path / "bad_type.yaml"
        path.write_text("type: hub\ncosts: [[1, 2]]\n")
        with pytest.raises(UnsupportedProblemTypeError):
            load_problem_data(str(path))


class TestGenerateProblemData:
    def test_shape_and_bounds(self):
        data = generate_problem_data(15, 4, seed=1, low=5, high=9)
        assert data.costs.shape == (15, 4)
        assert data.costs.min() >= 5
        assert data.costs.max() <= 9
        assert data.name == "random_15x4"

    def test_seeded_generation_is_reproducible(self):
        first = generate_problem_data(6, 3, seed=99)
        second = generate_problem_data(6, 3, seed=99)
        assert np.array_equal(first.costs, second.costs)
        print("✅ Seeded generation reproducible")

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            generate_problem_data(0, 3)
        with pytest.raises(ValueError):
            generate_problem_data(3, 3, low=10, high=1)


class TestSaveProblemData:
    def test_saved_problem_loads_back(self, capacitated_problem, tmp_path):
        path = save_problem_data(capacitated_problem, str(tmp_path / "nested" / "cap.yaml"))
        loaded = load_problem_data(path)
        assert loaded.name == capacitated_problem.name
        assert loaded.problem_type is ProblemType.CAPACITATED
        assert np.array_equal(loaded.costs, capacitated_problem.costs)
        print("✅ Saved problem reloads identically")


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
