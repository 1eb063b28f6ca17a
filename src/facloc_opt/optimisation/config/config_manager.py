"""
Configuration data classes and management for optimization.

This module defines structured configuration classes for the discrete PSO
(NDPSO) optimizer and provides validation and loading capabilities.

The configuration system supports:
- NDPSO algorithm parameters (swarm size, coefficients, inertia decay)
- Termination (fixed iteration count)
- Progress monitoring and logging options
- Coefficient parameter sweeps with repeated trials

Example YAML Configuration:
```yaml
problem:
  path: "problems/toy.yaml"
  type: "uncapacitated"
  objective: "minimize"

optimization:
  algorithm:
    type: "NDPSO"
    swarm_size: 30
    inertia: 0.9
    cognitive: 0.5
    social: 0.5
    inertial_discount: 0.99
    seed: 42
  termination:
    max_iterations: 100
  monitoring:
    progress_frequency: 10
  parameter_sweep:
    enabled: true
    values: [0.1, 0.3, 0.5, 0.7, 0.9]
    trials_per_point: 10

output:
  save_results: true
  results_dir: "output/toy"

logging:
  log_dir: "output/toy/logs"
  console_level: "INFO"
```

Usage:
```python
config_manager = OptimizationConfigManager('config.yaml')
pso_config = config_manager.get_pso_config()
optimizer = NDPSO(pso_config, seed=config_manager.get_seed())
```
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Coefficient grid used by the parameter sweep. Kept as an explicit set so
# the boundary value 0.9 is always present exactly once.
SWEEP_VALUES: tuple[float, ...] = (0.1, 0.3, 0.5, 0.7, 0.9)


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in range [0.0, 1.0], got {value}")


@dataclass(frozen=True)
class PSOConfig:
    """
    Discrete PSO (NDPSO) algorithm configuration.

    The optimizer treats one PSOConfig as an immutable snapshot: a trial reads
    it but never changes it, and the parameter sweep builds a new snapshot for
    every grid point instead of mutating a shared one. The only value that
    changes during a run (the decayed inertia) lives on the optimizer.

    Attributes:
    ===========

    swarm_size : int, default=30
        Number of particles. Must be at least 1.

    social : float, default=0.5
        Per-dimension probability of copying the global best's value.

    cognitive : float, default=0.5
        Per-dimension probability of copying the particle's personal best.

    inertia : float, default=0.9
        Initial per-dimension probability of a random redraw. The optimizer
        resets its working inertia to this value at the start of every run.

    inertial_discount : float, default=0.99
        Multiplier applied to the working inertia once per iteration, before
        particles move. Must be in (0, 1].

    max_iterations : int, default=100
        Exact number of iterations per run (no early stopping). 0 is allowed
        and returns the best particle of the random initial swarm.

    Usage Examples:
    ==============

    ```python
    # Defaults
    config = PSOConfig()

    # Fast exploratory run
    config = PSOConfig(swarm_size=10, max_iterations=50, inertia=0.7)

    # Derive a new snapshot instead of mutating
    from dataclasses import replace
    tuned = replace(config, social=0.3)
    ```
    """

    swarm_size: int = 30
    social: float = 0.5
    cognitive: float = 0.5
    inertia: float = 0.9
    inertial_discount: float = 0.99
    max_iterations: int = 100

    def __post_init__(self):
        """Validate PSO configuration parameters."""
        if self.swarm_size < 1:
            raise ValueError("Swarm size must be positive")

        if self.max_iterations < 0:
            raise ValueError("Max iterations cannot be negative")

        _check_probability("Social coefficient", self.social)
        _check_probability("Cognitive coefficient", self.cognitive)
        _check_probability("Inertia", self.inertia)

        if not 0.0 < self.inertial_discount <= 1.0:
            raise ValueError("Inertial discount must be in range (0.0, 1.0]")


@dataclass
class SweepConfig:
    """
    Coefficient parameter sweep configuration.

    The sweep visits every (inertia, cognitive, social) triple drawn from
    ``values`` and runs ``trials_per_point`` independent trials for each.
    With the defaults this is 5 × 5 × 5 = 125 grid points and 1250 trials.

    Attributes:
        enabled: Whether the config-driven pipeline runs a sweep instead of a
                 single optimization.
        values: Coefficient values used on each of the three axes.
        trials_per_point: Independent trials (fresh swarm) per grid point.
        isolate_failures: When True a failing trial is logged and skipped;
                          when False (default) it halts the sweep.

    Example:
        ```yaml
        parameter_sweep:
          enabled: true
          values: [0.1, 0.5, 0.9]
          trials_per_point: 5
        ```
        This creates 3×3×3 = 27 grid points and 135 trials.
    """

    enabled: bool = False
    values: tuple[float, ...] = SWEEP_VALUES
    trials_per_point: int = 10
    isolate_failures: bool = False

    def __post_init__(self):
        """Validate sweep configuration."""
        self.values = tuple(float(v) for v in self.values)

        if not self.values:
            raise ValueError("Parameter sweep needs at least one coefficient value")

        if len(set(self.values)) != len(self.values):
            raise ValueError("Parameter sweep values must be unique")

        for value in self.values:
            _check_probability("Parameter sweep value", value)

        if self.trials_per_point < 1:
            raise ValueError("Trials per grid point must be positive")

    @property
    def num_points(self) -> int:
        return len(self.values) ** 3

    @property
    def num_trials(self) -> int:
        return self.num_points * self.trials_per_point


@dataclass
class MonitoringConfig:
    """
    Progress monitoring and logging configuration.

    Attributes:
        progress_frequency: Log the all-time best every N iterations.
        log_level: Console logging verbosity ('DEBUG', 'INFO', 'WARNING', 'ERROR').
    """

    progress_frequency: int = 10
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate monitoring configuration."""
        if self.progress_frequency < 1:
            raise ValueError("Progress frequency must be positive")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level not in valid_log_levels:
            raise ValueError(f"Log level must be one of {valid_log_levels}")


@dataclass
class OutputConfig:
    """Where and how results are exported."""

    save_results: bool = False
    results_dir: str | None = None
    prefix: str = "result"

    def __post_init__(self):
        if self.save_results and not self.results_dir:
            raise ValueError("results_dir is required when save_results is enabled")


class OptimizationConfigManager:
    """
    Configuration manager for facility location optimization.

    Handles loading, validation, and structured access to optimization
    configurations given as YAML files or dictionaries.

    Configuration Structure:
        ```yaml
        problem: {...}          # Problem source (path or generate) and tags
        optimization:
          algorithm: {...}      # NDPSO parameters (+ seed)
          termination: {...}    # max_iterations
          monitoring: {...}     # Progress reporting
          parameter_sweep: {...}
        output: {...}           # Result export
        logging: {...}          # setup_logger arguments
        ```

    Usage Pattern:
        ```python
        config_manager = OptimizationConfigManager('optimization_config.yaml')

        pso_config = config_manager.get_pso_config()
        sweep_config = config_manager.get_sweep_config()
        ```
    """

    def __init__(self, config_path: str | None = None, config_dict: dict | None = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to YAML configuration file
            config_dict: Configuration dictionary (alternative to file)

        Raises:
            FileNotFoundError: If config_path doesn't exist
            ValueError: If both, neither, or invalid config sources provided
            yaml.YAMLError: If YAML file is malformed
            ValueError: If configuration validation fails
        """
        if config_path and config_dict:
            raise ValueError("Provide either config_path or config_dict, not both")

        if not config_path and not config_dict:
            raise ValueError(
                "Configuration is required. Provide either:\n"
                "  - config_path: Path to YAML configuration file\n"
                "  - config_dict: Configuration dictionary\n"
                "Example: OptimizationConfigManager('my_config.yaml')"
            )

        if config_path:
            self.config = self._load_yaml_config(config_path)
            logger.info("📋 Using loaded configuration file")
        else:
            self.config = config_dict
            logger.info("📋 Using provided configuration dictionary")

        self._validate_config()
        self._setup_structured_configs()

    def _load_yaml_config(self, config_path: str) -> dict[str, Any]:
        """Load configuration from YAML file with error handling."""
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in {config_path}: {e}")

        if not isinstance(config, dict):
            raise ValueError(f"Configuration must be a dictionary, got {type(config)}")

        logger.info("📂 Loaded configuration from %s", config_path)
        return config

    def _validate_config(self):
        """Validate configuration structure and required fields."""
        required_sections = ["problem", "optimization"]
        for section in required_sections:
            if section not in self.config:
                raise ValueError(f"Missing required configuration section: '{section}'")

        opt_config = self.config["optimization"]
        if "algorithm" not in opt_config:
            raise ValueError("Missing required optimization section: 'algorithm'")

        alg_config = opt_config["algorithm"]
        if alg_config.get("type", "NDPSO") != "NDPSO":
            raise ValueError("Only NDPSO algorithm supported currently")

    def _setup_structured_configs(self):
        """Setup structured configuration objects with validation."""
        opt_config = self.config["optimization"]
        alg_config = opt_config["algorithm"]

        if "swarm_size" not in alg_config:
            raise ValueError(
                "Missing required parameter 'swarm_size' in algorithm configuration.\n"
                "Example:\n"
                "optimization:\n"
                "  algorithm:\n"
                "    swarm_size: 30"
            )

        term_config = opt_config.get("termination", {})
        if "max_iterations" not in term_config:
            raise ValueError(
                "Missing required parameter 'max_iterations' in termination configuration.\n"
                "Example:\n"
                "optimization:\n"
                "  termination:\n"
                "    max_iterations: 100"
            )

        self.pso_config = PSOConfig(
            swarm_size=alg_config["swarm_size"],  # REQUIRED
            social=alg_config.get("social", 0.5),
            cognitive=alg_config.get("cognitive", 0.5),
            inertia=alg_config.get("inertia", 0.9),
            inertial_discount=alg_config.get("inertial_discount", 0.99),
            max_iterations=term_config["max_iterations"],  # REQUIRED
        )
        self.seed = alg_config.get("seed")

        sweep_config = opt_config.get("parameter_sweep", {})
        self.sweep_config = SweepConfig(
            enabled=sweep_config.get("enabled", False),
            values=sweep_config.get("values", SWEEP_VALUES),
            trials_per_point=sweep_config.get("trials_per_point", 10),
            isolate_failures=sweep_config.get("isolate_failures", False),
        )

        mon_config = opt_config.get("monitoring", {})
        self.monitoring_config = MonitoringConfig(
            progress_frequency=mon_config.get("progress_frequency", 10),
            log_level=mon_config.get("log_level", "INFO"),
        )

        out_config = self.config.get("output", {})
        self.output_config = OutputConfig(
            save_results=out_config.get("save_results", False),
            results_dir=out_config.get("results_dir"),
            prefix=out_config.get("prefix", "result"),
        )

    def get_pso_config(self) -> PSOConfig:
        """Get NDPSO algorithm configuration."""
        return self.pso_config

    def get_sweep_config(self) -> SweepConfig:
        """Get parameter sweep configuration."""
        return self.sweep_config

    def get_monitoring_config(self) -> MonitoringConfig:
        """Get monitoring and logging configuration."""
        return self.monitoring_config

    def get_output_config(self) -> OutputConfig:
        """Get result export configuration."""
        return self.output_config

    def get_problem_config(self) -> dict[str, Any]:
        """Get problem configuration (source and type tags)."""
        return self.config["problem"]

    def get_logging_config(self) -> dict[str, Any]:
        """Get keyword arguments for setup_logger."""
        return self.config.get("logging", {})

    def get_seed(self) -> int | None:
        """Get random seed for the optimizer (None = unseeded)."""
        return self.seed

    def get_full_config(self) -> dict[str, Any]:
        """Get complete configuration dictionary."""
        return self.config.copy()

    def print_summary(self):
        """Print configuration summary for verification."""
        problem = self.config["problem"]
        print("\n📋 OPTIMIZATION CONFIGURATION SUMMARY:")

        print("   🎯 Problem Configuration:")
        print(f"      Source: {problem.get('path', 'generated')}")
        print(f"      Type: {problem.get('type', 'uncapacitated')}")
        print(f"      Objective: {problem.get('objective', 'minimize')}")

        print("   🔄 Algorithm Configuration:")
        print("      Type: NDPSO")
        print(f"      Swarm size: {self.pso_config.swarm_size}")
        print(f"      Inertia: {self.pso_config.inertia} (discount {self.pso_config.inertial_discount})")
        print(f"      Cognitive/Social: {self.pso_config.cognitive}/{self.pso_config.social}")
        print(f"      Max iterations: {self.pso_config.max_iterations}")
        print(f"      Seed: {self.seed if self.seed is not None else 'random'}")

        print("   📊 Monitoring Configuration:")
        print(f"      Progress frequency: {self.monitoring_config.progress_frequency}")
        print(f"      Log level: {self.monitoring_config.log_level}")

        print("   🔢 Parameter Sweep Configuration:")
        print(f"      Enabled: {self.sweep_config.enabled}")
        if self.sweep_config.enabled:
            print(f"      Values per axis: {list(self.sweep_config.values)}")
            print(f"      Trials per point: {self.sweep_config.trials_per_point}")
            print(f"      Total trials: {self.sweep_config.num_trials}")
