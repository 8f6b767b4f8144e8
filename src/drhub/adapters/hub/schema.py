"""Pydantic schemas for the hub API server's JSON objects.

Only the fields the reconciler reads or writes are modelled; everything else
is ignored on input and never sent back.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field


class HubModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMeta(HubModel):
    name: str
    namespace: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    resource_version: str | None = Field(default=None, alias="resourceVersion")


class ListMeta(HubModel):
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    continue_token: str | None = Field(default=None, alias="continue")


# DR intent


class DecisionPayload(HubModel):
    home_cluster: str = Field(default="", alias="homeCluster")
    peer_cluster: str = Field(default="", alias="peerCluster")


class IntentSpec(HubModel):
    failover_clusters: dict[str, str] = Field(default_factory=dict, alias="failoverClusters")
    s3_endpoint: str = Field(default="", alias="s3Endpoint")
    s3_secret_name: str = Field(default="", alias="s3SecretName")


class IntentStatus(HubModel):
    decisions: dict[str, DecisionPayload] = Field(default_factory=dict)


class ApplicationVolumeReplicationPayload(HubModel):
    metadata: ObjectMeta
    spec: IntentSpec = Field(default_factory=IntentSpec)
    status: IntentStatus | None = None


# Subscriptions


class PlacementRefPayload(HubModel):
    name: str = ""
    namespace: str | None = None
    kind: str | None = None


class SubscriptionPlacement(HubModel):
    placement_ref: PlacementRefPayload | None = Field(default=None, alias="placementRef")
    local: bool | None = None


class SubscriptionSpec(HubModel):
    placement: SubscriptionPlacement | None = None


class SubscriptionStatus(HubModel):
    phase: str | None = None
    statuses: dict[str, object] | None = None


class SubscriptionPayload(HubModel):
    metadata: ObjectMeta
    spec: SubscriptionSpec = Field(default_factory=SubscriptionSpec)
    status: SubscriptionStatus | None = None


class SubscriptionList(HubModel):
    metadata: ListMeta = Field(default_factory=ListMeta)
    items: list[SubscriptionPayload] = Field(default_factory=list)


# Placement


class ClusterNamePayload(HubModel):
    name: str


class LabelSelector(HubModel):
    match_labels: dict[str, str] = Field(default_factory=dict, alias="matchLabels")


class PlacementRuleSpec(HubModel):
    cluster_replicas: int | None = Field(default=None, alias="clusterReplicas")
    clusters: list[ClusterNamePayload] = Field(default_factory=list)
    cluster_selector: LabelSelector | None = Field(default=None, alias="clusterSelector")


class PlacementRulePayload(HubModel):
    metadata: ObjectMeta
    spec: PlacementRuleSpec = Field(default_factory=PlacementRuleSpec)


class ManagedClusterPayload(HubModel):
    metadata: ObjectMeta


class ManagedClusterList(HubModel):
    metadata: ListMeta = Field(default_factory=ListMeta)
    items: list[ManagedClusterPayload] = Field(default_factory=list)


# Work


class ConditionPayload(HubModel):
    type: str
    status: str
    last_transition_time: datetime = Field(alias="lastTransitionTime")
    reason: str | None = None
    message: str | None = None


class Workload(HubModel):
    manifests: list[dict[str, object]] = Field(default_factory=list)


class ManifestWorkSpec(HubModel):
    workload: Workload = Field(default_factory=Workload)


class ManifestWorkStatus(HubModel):
    conditions: list[ConditionPayload] = Field(default_factory=list)


class ManifestWorkPayload(HubModel):
    api_version: str = Field(default="work.open-cluster-management.io/v1", alias="apiVersion")
    kind: str = "ManifestWork"
    metadata: ObjectMeta
    spec: ManifestWorkSpec = Field(default_factory=ManifestWorkSpec)
    status: ManifestWorkStatus | None = None


# Secrets


class SecretPayload(HubModel):
    metadata: ObjectMeta
    data: dict[str, str] = Field(default_factory=dict)
