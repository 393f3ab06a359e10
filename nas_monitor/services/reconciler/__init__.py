"""
Reconciliation Module

Components:
- ReconciliationLoop: Main orchestrator, one non-overlapping cycle at a time
- ReconciliationState: Runtime state owned by the loop
- IntervalPolicy: Next sleep duration from classification and battery
- TargetReconciler: Per-target mount/skip with failure bookkeeping
- StatusReporter: Throttled status summary line
"""

from .environment_classifier import classify_environment, is_home_network
from .interval_policy import IntervalPolicy, is_battery_critical
from .reconciliation_loop import ReconciliationLoop
from .reconciliation_state import ReconciliationState
from .status_reporter import StatusReporter
from .target_reconciler import TargetReconciler

__all__ = [
    "ReconciliationLoop",
    "ReconciliationState",
    "IntervalPolicy",
    "TargetReconciler",
    "StatusReporter",
    "classify_environment",
    "is_home_network",
    "is_battery_critical",
]
