"""Registry synchronization — the pipeline from package events to registry state.

This package provides:
- EventRouter: filters lifecycle events and drives the per-kind pipeline
- RegistrySynchronizer: applies typed entries with clear-previous semantics
"""

from mlagent.sync.router import EventRouter, SyncReport
from mlagent.sync.synchronizer import RegistrySynchronizer, SyncOutcome

__all__ = ["EventRouter", "RegistrySynchronizer", "SyncOutcome", "SyncReport"]
