"""Optimisation engine: problems, strategies, swarm, runners and configuration."""
