"""Run configuration."""

from .simulation_config import ORIGIN_SPACING_BP, SimulationConfig

__all__ = ["ORIGIN_SPACING_BP", "SimulationConfig"]
