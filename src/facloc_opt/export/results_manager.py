"""
Result export for facility location optimization.

This module writes optimization results to disk: one JSON document per
result plus a CSV summary, and flat CSV tables of parameter sweep trials for
later analysis.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SWEEP_FIELDNAMES = [
    "problem_name",
    "problem_type",
    "obj_type",
    "trial",
    "inertia",
    "cognitive",
    "social",
    "inertial_discount",
    "swarm_size",
    "max_iterations",
    "fitness",
    "elapsed_time",
    "position",
    "customer_assignments",
]


class ResultsExportManager:
    """
    Coordinates export of optimization results to standardized formats.

    Supports:
    - Single/multiple ProblemResults → JSON files + CSV summary
    - Parameter sweep rows → CSV table
    """

    def export_single_result(
        self,
        result,
        result_id: str,
        output_dir: str,
        metadata: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Export one result as JSON.

        Args:
            result: ProblemResults (anything with ``to_dict()``)
            result_id: Unique identifier, used as the file stem
            output_dir: Directory where the file is created
            metadata: Optional extra fields stored next to the result

        Returns:
            Export summary with the file path
        """
        Path(output_dir).mkdir(parents=True, exist_ok=True)
        path = Path(output_dir) / f"{result_id}.json"

        document = {"result_id": result_id, **(metadata or {}), **result.to_dict()}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)

        return {"result_id": result_id, "path": str(path), "format": "json"}

    def export_results(
        self,
        results: list,
        output_dir: str,
        prefix: str = "result",
        metadata: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Export several results with consistent naming and a CSV summary.

        Args:
            results: List of ProblemResults
            output_dir: Base directory for all files
            prefix: Prefix for result IDs (e.g., "best")
            metadata: Optional common metadata

        Returns:
            List of export summaries, one per result
        """
        if not results:
            return []

        exports = []
        summary_rows = []
        for i, result in enumerate(results):
            result_id = f"{prefix}_{i:02d}"
            exports.append(self.export_single_result(result, result_id, output_dir, metadata))
            summary_rows.append(
                {
                    "result_id": result_id,
                    "fitness": result.fitness,
                    "elapsed_time": result.elapsed_time,
                    "problem_type": result.problem_type.value,
                    "obj_type": result.obj_type.value,
                }
            )

        self._export_summary_csv(summary_rows, output_dir, prefix)
        return exports

    def export_rows(self, rows: list[dict[str, Any]], csv_path: str) -> str:
        """Write parameter sweep rows to ``csv_path`` and return the path."""
        csv_path = Path(csv_path)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=SWEEP_FIELDNAMES)
            writer.writeheader()
            for row in rows:
                writer.writerow(self._flatten(row))
        logger.info("✅ Sweep CSV written: %s (%d rows)", csv_path, len(rows))
        return str(csv_path)

    @staticmethod
    def _flatten(row: dict[str, Any]) -> dict[str, Any]:
        flat = dict(row)
        for key in ("position", "customer_assignments"):
            if key in flat and not isinstance(flat[key], str):
                flat[key] = json.dumps([int(v) for v in flat[key]])
        return flat

    def _export_summary_csv(self, rows, output_dir, prefix):
        """Export a CSV summary of results with their fitness and timing."""
        csv_path = Path(output_dir) / f"{prefix}_summary.csv"
        fieldnames = ["result_id", "fitness", "elapsed_time", "problem_type", "obj_type"]
        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)
        logger.info("✅ Result summary CSV written: %s", csv_path)
