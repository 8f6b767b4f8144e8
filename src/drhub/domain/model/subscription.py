"""Subscriptions: externally owned propagation records read by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import SubscriptionPhase
from .labels import DR_STATE_LABEL, DR_STATE_PROTECTED, PAUSE_LABEL, PAUSE_TRUE
from .references import ObjectRef


@dataclass(frozen=True, slots=True)
class PlacementRef:
    name: str
    namespace: str | None = None

    def resolve(self, default_namespace: str) -> ObjectRef:
        """Fall back to the subscription namespace when the reference omits one."""

        return ObjectRef(name=self.name, namespace=self.namespace or default_namespace)


@dataclass(slots=True, kw_only=True)
class Subscription:
    name: str
    namespace: str
    labels: dict[str, str] = field(default_factory=dict[str, str])
    phase: SubscriptionPhase = SubscriptionPhase.UNKNOWN
    # keyed by managed cluster name; only presence is meaningful
    statuses: dict[str, object] = field(default_factory=dict[str, object])
    placement_ref: PlacementRef | None = None
    placement_local: bool = False
    resource_version: str | None = None

    @property
    def ref(self) -> ObjectRef:
        return ObjectRef(name=self.name, namespace=self.namespace)

    @property
    def is_managed_cluster_copy(self) -> bool:
        return self.phase is SubscriptionPhase.SUBSCRIBED or self.placement_local

    @property
    def is_paused_for_dr(self) -> bool:
        return _label_equals(self.labels, DR_STATE_LABEL, DR_STATE_PROTECTED) and _label_equals(
            self.labels, PAUSE_LABEL, PAUSE_TRUE
        )

    @property
    def is_ready(self) -> bool:
        return self.phase is SubscriptionPhase.PROPAGATED and bool(self.statuses)

    def has_status_for(self, cluster: str) -> bool:
        return self.statuses.get(cluster) is not None


def _label_equals(labels: dict[str, str], key: str, expected: str) -> bool:
    value = labels.get(key)
    if not value:
        return False
    return value.casefold() == expected.casefold()
