"""Two-state stochastic gate for the growth -> synthesis transition.

Each call in growth phase draws one uniform value; the cell enters S phase
when the draw exceeds the threshold, so the waiting time is geometric with
per-draw success probability (1 - threshold).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class CellPhase(str, Enum):
    GROWTH = "G"
    SYNTHESIS = "S"


@dataclass
class PhaseGate:
    """Irreversible G -> S gate with a diagnostic count of failed draws."""
    phase: CellPhase = CellPhase.GROWTH
    iterations: int = 0

    @property
    def in_synthesis(self) -> bool:
        return self.phase is CellPhase.SYNTHESIS

    def advance(self, threshold: float, rng: np.random.Generator) -> bool:
        """Draw once and return True if this call moved the cell into S phase."""
        if not 0.0 <= threshold < 1.0:
            raise ValueError("threshold must be in [0, 1)")
        if self.in_synthesis:
            return False
        if rng.random() > threshold:
            self.phase = CellPhase.SYNTHESIS
            return True
        self.iterations += 1
        return False
