"""Placement criteria and the managed clusters they resolve to."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, kw_only=True)
class PlacementRule:
    """Abstract cluster-selection criteria referenced by a subscription."""

    name: str
    namespace: str
    cluster_replicas: int | None = None
    cluster_names: tuple[str, ...] = ()
    cluster_selector: dict[str, str] = field(default_factory=dict[str, str])


@dataclass(frozen=True, slots=True)
class ManagedCluster:
    name: str
    labels: dict[str, str] = field(default_factory=dict[str, str], compare=False, hash=False)
