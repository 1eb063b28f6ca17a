"""Console script for facloc_opt."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console

from facloc_opt.export.results_manager import ResultsExportManager
from facloc_opt.logging import setup_logger
from facloc_opt.optimisation.config import OptimizationConfigManager, PSOConfig, SweepConfig
from facloc_opt.optimisation.monitoring import ListenerCollection, LoggingListener, ResultsRecorder
from facloc_opt.optimisation.problems.base import ProblemData
from facloc_opt.optimisation.runners import NDPSO, ProblemResults
from facloc_opt.preprocessing.prepare_problem import (
    generate_problem_data,
    load_problem_data,
    save_problem_data,
)

app = typer.Typer(help="Discrete PSO for facility location problems.")
console = Console()
logger = logging.getLogger("facloc_opt.cli")


def _pso_config(config: Optional[Path], **overrides) -> tuple[PSOConfig, Optional[int]]:
    """Build a PSOConfig from an optional YAML file plus command line overrides."""
    if config is not None:
        manager = OptimizationConfigManager(str(config))
        pso_config, seed = manager.get_pso_config(), manager.get_seed()
    else:
        pso_config, seed = PSOConfig(), None

    seed_override = overrides.pop("seed", None)
    if seed_override is not None:
        seed = seed_override
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return replace(pso_config, **overrides), seed


def _print_results(data: ProblemData, results: ProblemResults) -> None:
    console.print(f"[bold]Problem:[/bold] {data.summary()}")
    console.print(f"[bold]Best fitness:[/bold] {results.fitness:.6f}")
    console.print(f"[bold]Facility levels:[/bold] {results.position.tolist()}")
    console.print(f"[bold]Assignments:[/bold] {results.customer_assignments.tolist()}")
    console.print(f"[bold]Time:[/bold] {results.elapsed_time:.3f}s")


def load_problem_from_config(problem_cfg: dict) -> ProblemData:
    """Load the problem named in a config's ``problem`` section (``path`` or ``generate``)."""
    if problem_cfg.get("path"):
        return load_problem_data(
            problem_cfg["path"],
            problem_type=problem_cfg.get("type"),
            obj_type=problem_cfg.get("objective"),
            name=problem_cfg.get("name"),
        )
    if problem_cfg.get("generate"):
        gen = problem_cfg["generate"]
        return generate_problem_data(
            num_customers=gen["customers"],
            num_facilities=gen["facilities"],
            seed=gen.get("seed"),
            low=gen.get("low", 1),
            high=gen.get("high", 100),
            problem_type=problem_cfg.get("type", "uncapacitated"),
            obj_type=problem_cfg.get("objective", "minimize"),
            name=problem_cfg.get("name"),
        )
    raise ValueError("Problem configuration needs either 'path' or 'generate'")


def run_pipeline(config_path: str):
    """
    Run the complete pipeline described by a YAML config.

    1. Load config and set up logging
    2. Load or generate the problem
    3. Run a single optimization, or the parameter sweep when enabled
    4. Export results when ``output.save_results`` is set

    Returns:
        ProblemResults for a single run, or the ResultsRecorder of a sweep
    """
    manager = OptimizationConfigManager(config_path)
    log_cfg = manager.get_logging_config()
    setup_logger(
        name="facloc_opt",
        log_dir=log_cfg.get("log_dir"),
        log_file=log_cfg.get("log_file", "run.log"),
        console_level=log_cfg.get("console_level", manager.get_monitoring_config().log_level),
        file_level=log_cfg.get("file_level", "DEBUG"),
    )
    logger.info("🚀 Starting facility location run")
    logger.info("📋 Config file:\n%s", yaml.dump(manager.get_full_config(), sort_keys=False, default_flow_style=False))

    data = load_problem_from_config(manager.get_problem_config())

    monitoring = manager.get_monitoring_config()
    sweep = manager.get_sweep_config()
    output = manager.get_output_config()
    recorder = ResultsRecorder()
    listener = ListenerCollection([LoggingListener(monitoring.progress_frequency), recorder])
    optimizer = NDPSO(manager.get_pso_config(), listener=listener, seed=manager.get_seed())

    if sweep.enabled:
        optimizer.search_parameters(
            data, values=sweep.values, trials=sweep.trials_per_point, isolate_failures=sweep.isolate_failures
        )
        if output.save_results:
            recorder.export(str(Path(output.results_dir) / f"{output.prefix}_sweep.csv"))
        logger.info("✅ Parameter sweep complete!")
        return recorder

    listener.handle_algorithm(optimizer, data.name, data.problem_type, data.obj_type)
    results = optimizer.optimize(data)
    listener.handle_results(results)
    if output.save_results:
        ResultsExportManager().export_results(
            [results], output.results_dir, prefix=output.prefix,
            metadata={"problem_name": data.name, "parameters": optimizer.get_json_parameters()},
        )
    logger.info("✅ Optimization complete!")
    return results


@app.command()
def generate(
    output: Path = typer.Argument(..., help="YAML file to write"),
    customers: int = typer.Option(10, help="Number of customers"),
    facilities: int = typer.Option(5, help="Number of candidate facilities"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    problem_type: str = typer.Option("uncapacitated", "--type", help="uncapacitated or capacitated"),
    objective: str = typer.Option("minimize", help="minimize or maximize"),
):
    """Generate a random problem instance."""
    data = generate_problem_data(customers, facilities, seed=seed, problem_type=problem_type, obj_type=objective)
    path = save_problem_data(data, str(output))
    console.print(f"💾 Wrote {data.summary()} to {path}")


@app.command()
def optimize(
    problem: Path = typer.Argument(..., help="Problem file (.yaml or .csv)"),
    config: Optional[Path] = typer.Option(None, help="Optimization config YAML"),
    swarm_size: Optional[int] = typer.Option(None, help="Number of particles"),
    max_iterations: Optional[int] = typer.Option(None, help="Iterations per run"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    output_dir: Optional[Path] = typer.Option(None, help="Directory for result files"),
):
    """Run a single optimization."""
    setup_logger("facloc_opt", console_level="WARNING")
    data = load_problem_data(str(problem))
    pso_config, seed = _pso_config(config, swarm_size=swarm_size, max_iterations=max_iterations, seed=seed)

    optimizer = NDPSO(pso_config, seed=seed)
    results = optimizer.optimize(data)
    _print_results(data, results)

    if output_dir is not None:
        ResultsExportManager().export_results(
            [results], str(output_dir), prefix="best",
            metadata={"problem_name": data.name, "parameters": optimizer.get_json_parameters()},
        )
        console.print(f"💾 Results written to {output_dir}")


@app.command()
def sweep(
    problem: Path = typer.Argument(..., help="Problem file (.yaml or .csv)"),
    config: Optional[Path] = typer.Option(None, help="Optimization config YAML"),
    trials: Optional[int] = typer.Option(None, help="Trials per grid point (overrides the config)"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    output: Path = typer.Option(Path("sweep_results.csv"), help="CSV file for per-trial results"),
):
    """Run the inertia × cognitive × social parameter sweep."""
    setup_logger("facloc_opt", console_level="INFO")
    data = load_problem_data(str(problem))
    pso_config, seed = _pso_config(config, seed=seed)
    sweep_config = OptimizationConfigManager(str(config)).get_sweep_config() if config is not None else SweepConfig()
    if trials is not None:
        sweep_config = replace(sweep_config, trials_per_point=trials)

    recorder = ResultsRecorder()
    optimizer = NDPSO(pso_config, listener=recorder, seed=seed)
    done = optimizer.search_parameters(
        data,
        values=sweep_config.values,
        trials=sweep_config.trials_per_point,
        isolate_failures=sweep_config.isolate_failures,
    )
    path = recorder.export(str(output))
    console.print(f"✅ {done} trials written to {path}")


@app.command()
def run(config: Path = typer.Argument(..., help="Pipeline config YAML")):
    """Run the pipeline described by a config file."""
    result = run_pipeline(str(config))
    if isinstance(result, ProblemResults):
        console.print(f"✅ Best fitness: {result.fitness:.6f}")
    else:
        console.print(f"✅ Sweep recorded {len(result)} trials")


if __name__ == "__main__":
    app()
