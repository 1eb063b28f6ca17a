"""Discrete particle swarm optimization for facility location."""

__version__ = "0.1.0"
