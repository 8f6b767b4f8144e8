"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SubscriptionPhase(StrEnum):
    """Propagation phase reported on a subscription.

    ``PROPAGATED`` marks the hub-side parent, ``SUBSCRIBED`` the child copy that
    lives on a managed cluster.
    """

    PROPAGATED = "Propagated"
    SUBSCRIBED = "Subscribed"
    FAILED = "Failed"
    PROPAGATION_FAILED = "PropagationFailed"
    UNKNOWN = ""

    @classmethod
    def parse(cls, value: str | None) -> SubscriptionPhase:
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class ConditionType(StrEnum):
    APPLIED = "Applied"
    AVAILABLE = "Available"
    PROGRESSING = "Progressing"
    DEGRADED = "Degraded"


class ConditionStatus(StrEnum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class BundleType(StrEnum):
    """Per-subscription work bundle kinds; used as the name suffix discriminator."""

    REPLICATION_GROUP = "vrg"
    VOLUME_RESTORE = "pv"
