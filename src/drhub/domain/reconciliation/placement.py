"""Select the home and peer cluster of a subscription from its placement.

The placement rule is resolved to candidate clusters by an external resolver.
This stage only enforces that the result is the fixed DR pair and then tells
home from peer by looking at which cluster already reports subscription status.
Candidate order is never relied upon.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from drhub.domain.errors import InvariantViolationError, PlacementMismatchError
from drhub.domain.model import PlacementDecision

if TYPE_CHECKING:
    from drhub.domain.model import ManagedCluster, PlacementRule, Subscription
    from drhub.domain.ports import (
        ClusterCandidateResolver,
        ClusterFilter,
        ClusterMap,
        PlacementRuleRepository,
    )

log = getLogger(__name__)

REQUIRED_CLUSTER_REPLICAS: Final[int] = 1
DR_PAIR_SIZE: Final[int] = 2


def require_clusters(rule: PlacementRule, clusters: ClusterMap) -> ClusterMap:
    """Default post-filter: pass everything through, but reject an empty set."""

    log.debug("Filtering %d candidate clusters for placement %s", len(clusters), rule.name)
    if not clusters:
        raise PlacementMismatchError(f"no clusters found for placement rule {rule.name}")
    return clusters


def resolve_cluster_pair(
    rule: PlacementRule,
    *,
    resolver: ClusterCandidateResolver,
    cluster_filter: ClusterFilter = require_clusters,
    required_replicas: int = REQUIRED_CLUSTER_REPLICAS,
    pair_size: int = DR_PAIR_SIZE,
) -> list[ManagedCluster]:
    """Resolve ``rule`` to exactly ``pair_size`` clusters, in no particular order."""

    candidates = resolver(rule)

    if rule.cluster_replicas is not None and rule.cluster_replicas != required_replicas:
        raise PlacementMismatchError(
            f"placement rule {rule.name} requests {rule.cluster_replicas} cluster replicas, "
            f"expected {required_replicas}"
        )

    filtered = cluster_filter(rule, dict(candidates))
    if len(filtered) != pair_size:
        raise PlacementMismatchError(
            f"placement rule {rule.name} should resolve to {pair_size} clusters, "
            f"found {len(filtered)}"
        )

    return list(filtered.values())


def select_home_and_peer(
    subscription: Subscription,
    clusters: list[ManagedCluster],
) -> PlacementDecision:
    """Home is the one cluster of the pair that reports status for ``subscription``."""

    if len(clusters) != DR_PAIR_SIZE:
        raise PlacementMismatchError(
            f"expected a pair of clusters for subscription {subscription.name}, "
            f"got {len(clusters)}"
        )

    reporting = [cluster for cluster in clusters if subscription.has_status_for(cluster.name)]
    if len(reporting) != 1:
        names = sorted(cluster.name for cluster in clusters)
        raise InvariantViolationError(
            f"mismatch between placement clusters {names} and statuses of subscription "
            f"{subscription.name}: {len(reporting)} of them report status"
        )

    home = reporting[0]
    peer = next(cluster for cluster in clusters if cluster is not home)
    return PlacementDecision(home_cluster=home.name, peer_cluster=peer.name)


@dataclass(slots=True)
class PlacementSelector:
    """Compute a placement decision for a hub-side subscription."""

    placements: PlacementRuleRepository
    resolver: ClusterCandidateResolver
    cluster_filter: ClusterFilter = require_clusters

    def __call__(self, subscription: Subscription) -> PlacementDecision:
        log.info("Selecting placement decision for subscription %s", subscription.ref)

        if not subscription.is_ready:
            raise InvariantViolationError(
                f"subscription {subscription.ref} not ready "
                f"(phase={subscription.phase.value!r}, statuses={len(subscription.statuses)})"
            )

        if subscription.placement_ref is None:
            raise InvariantViolationError(f"placement not set for subscription {subscription.ref}")

        rule_ref = subscription.placement_ref.resolve(subscription.namespace)
        rule = self.placements.get(namespace=rule_ref.namespace, name=rule_ref.name)
        if rule is None:
            raise InvariantViolationError(
                f"placement rule {rule_ref} referenced by subscription {subscription.ref} not found"
            )

        clusters = resolve_cluster_pair(
            rule,
            resolver=self.resolver,
            cluster_filter=self.cluster_filter,
        )
        decision = select_home_and_peer(subscription, clusters)
        log.info(
            "Subscription %s: home=%s peer=%s",
            subscription.ref,
            decision.home_cluster,
            decision.peer_cluster,
        )
        return decision
