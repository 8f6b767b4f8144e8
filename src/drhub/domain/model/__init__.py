"""Domain model for DR reconciliation."""

from __future__ import annotations

from .enums import BundleType, ConditionStatus, ConditionType, SubscriptionPhase
from .intent import DecisionMap, DRIntent, PlacementDecision
from .labels import (
    DR_STATE_LABEL,
    DR_STATE_PROTECTED,
    PAUSE_FALSE,
    PAUSE_LABEL,
    PAUSE_TRUE,
)
from .placement import ManagedCluster, PlacementRule
from .policy import ReplicationPolicy
from .references import ObjectRef
from .subscription import PlacementRef, Subscription
from .volume import VolumeRecord
from .work import Manifest, WorkBundle, WorkCondition, work_bundle_name

__all__ = [
    "DR_STATE_LABEL",
    "DR_STATE_PROTECTED",
    "PAUSE_FALSE",
    "PAUSE_LABEL",
    "PAUSE_TRUE",
    "BundleType",
    "ConditionStatus",
    "ConditionType",
    "DRIntent",
    "DecisionMap",
    "ManagedCluster",
    "Manifest",
    "ObjectRef",
    "PlacementDecision",
    "PlacementRef",
    "PlacementRule",
    "ReplicationPolicy",
    "Subscription",
    "SubscriptionPhase",
    "VolumeRecord",
    "WorkBundle",
    "WorkCondition",
    "work_bundle_name",
]
