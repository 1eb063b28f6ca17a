from .prepare_problem import generate_problem_data, load_problem_data, save_problem_data

__all__ = ["load_problem_data", "generate_problem_data", "save_problem_data"]
