"""DR intent: per-application disaster-recovery configuration and decisions."""

from __future__ import annotations

from dataclasses import dataclass, field

from .references import ObjectRef


@dataclass(frozen=True, slots=True)
class PlacementDecision:
    """Which cluster holds the primary copy of a subscription, and its DR counterpart."""

    home_cluster: str
    peer_cluster: str


type DecisionMap = dict[str, PlacementDecision]


@dataclass(slots=True, kw_only=True)
class DRIntent:
    """Declared DR configuration for one application.

    ``decisions`` is the status map, keyed by subscription name. The engine never
    mutates it in place; a pass builds a fresh map and hands it to the repository.
    """

    name: str
    namespace: str
    s3_endpoint: str = ""
    s3_secret_name: str = ""
    failover_clusters: dict[str, str] = field(default_factory=dict[str, str])
    decisions: DecisionMap = field(default_factory=dict[str, PlacementDecision])
    resource_version: str | None = None

    @property
    def ref(self) -> ObjectRef:
        return ObjectRef(name=self.name, namespace=self.namespace)

    @property
    def credential_ref(self) -> ObjectRef:
        """The object-storage credential secret lives beside the intent."""

        return ObjectRef(name=self.s3_secret_name, namespace=self.namespace)

    def decision_for(self, subscription_name: str) -> PlacementDecision | None:
        return self.decisions.get(subscription_name)

    def failover_cluster_for(self, subscription_name: str) -> str | None:
        cluster = self.failover_clusters.get(subscription_name)
        return cluster or None
