"""Reconciliation package: compare expected captures with the store and fill the gaps."""
from reconciliation.status import MirrorState, MirrorStatus
from reconciliation.mirror import Mirror, FillOutcome, FetchFailure
from reconciliation.scheduler import RunScheduler, RunState

__all__ = [
    'MirrorState',
    'MirrorStatus',
    'Mirror',
    'FillOutcome',
    'FetchFailure',
    'RunScheduler',
    'RunState',
]
