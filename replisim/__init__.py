"""Stochastic DNA replication of a single chromosome.

Main entry points:
- replisim.replication: ReplicationSimulator for programmatic use
- replisim.models: SegmentTrack replication state and the G/S phase gate
- replisim.stochastic: OriginSampler for weighted origin placement
- replisim.io: YAML config loading and CSV/JSON outputs
"""

from replisim.config import SimulationConfig
from replisim.models import CapacityError, CellPhase, DomainError, PhaseGate, SegmentTrack
from replisim.replication import ReplicationResult, ReplicationSimulator
from replisim.stochastic import OriginSampler, SamplingError

__all__ = [
    # Core classes
    "SegmentTrack",
    "PhaseGate",
    "CellPhase",
    "OriginSampler",
    "ReplicationSimulator",
    "ReplicationResult",
    "SimulationConfig",
    # Errors
    "DomainError",
    "CapacityError",
    "SamplingError",
]
