from .results_manager import SWEEP_FIELDNAMES, ResultsExportManager

__all__ = ["ResultsExportManager", "SWEEP_FIELDNAMES"]
