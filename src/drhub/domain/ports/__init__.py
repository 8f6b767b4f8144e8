"""Domain port definitions for adapters."""

from __future__ import annotations

from .backup import BackupStore, volume_bucket_name
from .persistence import (
    DRIntentRepository,
    HubRepositories,
    PlacementRuleRepository,
    SubscriptionRepository,
    WorkBundleRepository,
)
from .placement import ClusterCandidateResolver, ClusterFilter, ClusterMap

__all__ = [
    "BackupStore",
    "ClusterCandidateResolver",
    "ClusterFilter",
    "ClusterMap",
    "DRIntentRepository",
    "HubRepositories",
    "PlacementRuleRepository",
    "SubscriptionRepository",
    "WorkBundleRepository",
    "volume_bucket_name",
]
