"""Repository contracts of the Wirescout domain."""
from .snapshot_repository import SnapshotRepository

__all__ = ["SnapshotRepository"]
