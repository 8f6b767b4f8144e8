"""Ports for turning placement criteria into concrete managed clusters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from drhub.domain.model import ManagedCluster, PlacementRule

type ClusterMap = dict[str, ManagedCluster]


@runtime_checkable
class ClusterCandidateResolver(Protocol):
    """Resolve abstract placement criteria to candidate clusters keyed by name."""

    def __call__(self, rule: PlacementRule) -> ClusterMap: ...


@runtime_checkable
class ClusterFilter(Protocol):
    """Post-resolution policy hook narrowing the candidate set."""

    def __call__(self, rule: PlacementRule, clusters: ClusterMap) -> ClusterMap: ...
