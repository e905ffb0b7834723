"""Driver that gates S phase and replicates a chromosome to completion."""

from .replication_simulator import ReplicationResult, ReplicationSimulator

__all__ = ["ReplicationResult", "ReplicationSimulator"]
