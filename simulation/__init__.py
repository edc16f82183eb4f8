"""Batch runners for repeated random-draw experiments."""

from .runner import SimulationConfig, SimulationRunner

__all__ = ["SimulationConfig", "SimulationRunner"]
