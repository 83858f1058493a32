"""Background workers for Cadence."""

from .maintenance import MaintenanceWorker

__all__ = ["MaintenanceWorker"]
