# Run script for the config-driven pipeline
# Run from repo root:  python3 scripts/run.py --config configs/example.yaml
# Replace example with your config name

import argparse

from facloc_opt.cli import run_pipeline
from facloc_opt.optimisation.runners import ProblemResults


def main(config_path: str):
    result = run_pipeline(config_path)
    if isinstance(result, ProblemResults):
        print(f"Best fitness: {result.fitness}")
        print(f"Facility levels: {result.position.tolist()}")
    else:
        print(f"Sweep trials recorded: {len(result)}")


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Run facloc_opt NDPSO from config")
    p.add_argument("--config", "-c", default="configs/example.yaml", help="YAML config path")
    args = p.parse_args()
    main(args.config)
