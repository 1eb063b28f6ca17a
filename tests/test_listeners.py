"""
Tests for optimization listeners and result export.
"""

import csv
import json
import logging
from unittest.mock import MagicMock

import numpy as np
import pytest

from facloc_opt.export import SWEEP_FIELDNAMES, ResultsExportManager
from facloc_opt.optimisation.config import PSOConfig
from facloc_opt.optimisation.monitoring import (
    BaseListener,
    ListenerCollection,
    LoggingListener,
    ResultsRecorder,
)
from facloc_opt.optimisation.problems import ObjectiveType, ProblemType
from facloc_opt.optimisation.runners import NDPSO, ProblemResults


@pytest.fixture
def sample_result():
    return ProblemResults(
        elapsed_time=0.25,
        fitness=6.0,
        position=np.array([1, 2]),
        customer_assignments=np.array([1, 0, 0]),
        problem_type=ProblemType.UNCAPACITATED,
        obj_type=ObjectiveType.MINIMIZE,
    )


class TestBaseListeners:
    def test_base_listener_ignores_everything(self, sample_result):
        listener = BaseListener()
        listener.handle_algorithm(NDPSO(), "p", ProblemType.UNCAPACITATED, ObjectiveType.MINIMIZE)
        listener.handle_particle(None, 1)
        listener.handle_results(sample_result)

    def test_logging_listener(self, sample_result, caplog):
        caplog.set_level(logging.INFO, logger="facloc_opt")
        listener = LoggingListener(progress_frequency=2)
        particle = MagicMock(fitness=3.5)

        listener.handle_algorithm(NDPSO(), "toy", ProblemType.CAPACITATED, ObjectiveType.MAXIMIZE)
        listener.handle_particle(particle, 1)
        listener.handle_particle(particle, 2)
        listener.handle_results(sample_result)

        assert "toy (capacitated, maximize)" in caplog.text
        assert "Iteration 1:" not in caplog.text
        assert "Iteration 2:" in caplog.text
        assert "Best fitness 6.000000" in caplog.text
        print("✅ Logging listener reports progress at the configured frequency")

    def test_logging_listener_validation(self):
        with pytest.raises(ValueError):
            LoggingListener(progress_frequency=0)


class TestListenerCollection:
    def test_forwards_to_all(self, sample_result):
        first, second = MagicMock(), MagicMock()
        collection = ListenerCollection([first, second])
        collection.handle_results(sample_result)
        first.handle_results.assert_called_once_with(sample_result)
        second.handle_results.assert_called_once_with(sample_result)
        assert len(collection) == 2
        assert collection[1] is second

    def test_failure_isolated(self, sample_result):
        broken, healthy = MagicMock(), MagicMock()
        broken.handle_results.side_effect = RuntimeError("broken")
        ListenerCollection([broken, healthy]).handle_results(sample_result)
        healthy.handle_results.assert_called_once_with(sample_result)
        print("✅ One failing listener does not silence the others")


class TestResultsRecorder:
    def test_records_rows_with_trial_index(self, small_problem):
        recorder = ResultsRecorder()
        optimizer = NDPSO(PSOConfig(swarm_size=3, max_iterations=2), listener=recorder, seed=0)

        for _ in range(2):
            recorder.handle_algorithm(optimizer, small_problem.name, small_problem.problem_type,
                                      small_problem.obj_type)
            recorder.handle_results(optimizer.optimize(small_problem))
        optimizer.set_social(0.1)
        recorder.handle_algorithm(optimizer, small_problem.name, small_problem.problem_type,
                                  small_problem.obj_type)
        recorder.handle_results(optimizer.optimize(small_problem))

        assert len(recorder) == 3
        assert [r["trial"] for r in recorder.rows] == [0, 1, 0]
        assert recorder.rows[2]["social"] == 0.1
        assert recorder.rows[0]["problem_name"] == "small"
        assert len(recorder.rows[0]["customer_assignments"]) == 3

    def test_trial_index_restarts_for_new_problem(self, small_problem, tiny_problem):
        recorder = ResultsRecorder()
        optimizer = NDPSO(PSOConfig(swarm_size=2, max_iterations=1), listener=recorder, seed=0)

        for data in (small_problem, small_problem, tiny_problem, tiny_problem):
            recorder.handle_algorithm(optimizer, data.name, data.problem_type, data.obj_type)
            recorder.handle_results(optimizer.optimize(data))

        assert [r["trial"] for r in recorder.rows] == [0, 1, 0, 1]
        assert [r["problem_name"] for r in recorder.rows] == ["small", "small", "tiny", "tiny"]
        print("✅ Trial index restarts when the problem changes")

    def test_export_csv(self, tiny_problem, tmp_path):
        recorder = ResultsRecorder()
        optimizer = NDPSO(PSOConfig(swarm_size=1, max_iterations=1), listener=recorder, seed=0)
        optimizer.search_parameters(tiny_problem, values=(0.5,), trials=3)

        path = recorder.export(str(tmp_path / "sweep" / "rows.csv"))

        with open(path, newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 3
        assert list(rows[0]) == SWEEP_FIELDNAMES
        assert len(json.loads(rows[0]["customer_assignments"])) == 2
        print("✅ Sweep rows exported to CSV")


class TestResultsExportManager:
    def test_export_results(self, sample_result, tmp_path):
        exports = ResultsExportManager().export_results(
            [sample_result, sample_result], str(tmp_path), prefix="best", metadata={"problem_name": "small"}
        )
        assert [e["result_id"] for e in exports] == ["best_00", "best_01"]

        document = json.loads((tmp_path / "best_00.json").read_text())
        assert document["problem_name"] == "small"
        assert document["fitness"] == 6.0
        assert document["customer_assignments"] == [1, 0, 0]

        with open(tmp_path / "best_summary.csv", newline="") as f:
            summary = list(csv.DictReader(f))
        assert len(summary) == 2
        assert summary[0]["obj_type"] == "minimize"
        print("✅ Results exported as JSON with CSV summary")

    def test_export_nothing(self, tmp_path):
        assert ResultsExportManager().export_results([], str(tmp_path)) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
