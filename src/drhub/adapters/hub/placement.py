"""Placement candidate resolution against the hub's managed clusters."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .translator import translate_managed_cluster

if TYPE_CHECKING:
    from drhub.domain.model import ManagedCluster, PlacementRule
    from drhub.domain.ports import ClusterMap

    from .client import HubClient

log = getLogger(__name__)


@dataclass(slots=True)
class HubClusterResolver:
    """Keep the managed clusters a placement rule names or selects.

    A rule naming clusters explicitly and carrying a label selector matches the
    union of both; a rule with neither matches every managed cluster.
    """

    client: HubClient

    def __call__(self, rule: PlacementRule) -> ClusterMap:
        clusters = [
            translate_managed_cluster(payload) for payload in self.client.list_managed_clusters()
        ]
        candidates = {
            cluster.name: cluster for cluster in clusters if _matches(rule, cluster)
        }
        log.debug(
            "Placement rule %s/%s matched clusters %s",
            rule.namespace,
            rule.name,
            sorted(candidates),
        )
        return candidates


def _matches(rule: PlacementRule, cluster: ManagedCluster) -> bool:
    if not rule.cluster_names and not rule.cluster_selector:
        return True
    if cluster.name in rule.cluster_names:
        return True
    if rule.cluster_selector:
        return all(cluster.labels.get(key) == value for key, value in rule.cluster_selector.items())
    return False
