"""Reconciliation core for DR intents.

Flow of one pass:
1) read the DR intent and list the subscriptions in its namespace
2) classify each subscription (skip / paused for DR / converged / needs convergence)
3) paused subscriptions go through the failover sequence
4) subscriptions needing convergence get a placement decision and their
   role and replication-group work bundles converged on the home cluster
5) fold outcomes into one requeue flag and one decision map written to status
"""

from __future__ import annotations

from .conditions import is_work_applied, most_recent_conditions
from .contracts import (
    Classification,
    DecisionOutcome,
    OutcomeKind,
    RequeueOutcome,
    SkipOutcome,
    SubscriptionOutcome,
    SubscriptionPath,
)
from .convergence import ConvergeAction, converge_work
from .engine import ReconcileEngine, ReconcileResult
from .failover import FailoverReport, FailoverSequencer, FailoverState
from .placement import PlacementSelector, require_clusters, resolve_cluster_pair

__all__ = [
    "Classification",
    "ConvergeAction",
    "DecisionOutcome",
    "FailoverReport",
    "FailoverSequencer",
    "FailoverState",
    "OutcomeKind",
    "PlacementSelector",
    "ReconcileEngine",
    "ReconcileResult",
    "RequeueOutcome",
    "SkipOutcome",
    "SubscriptionOutcome",
    "SubscriptionPath",
    "converge_work",
    "is_work_applied",
    "most_recent_conditions",
    "require_clusters",
    "resolve_cluster_pair",
]
