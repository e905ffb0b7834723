"""Model definitions for chromosome replication state and cell phase."""

from .phase import CellPhase, PhaseGate
from .track import CapacityError, DomainError, SegmentTrack

__all__ = ["CapacityError", "CellPhase", "DomainError", "PhaseGate", "SegmentTrack"]
