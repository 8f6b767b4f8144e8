"""Translate hub API payloads into domain objects and back."""

from __future__ import annotations

from datetime import UTC
from typing import TYPE_CHECKING

from drhub.domain.model import (
    DRIntent,
    ManagedCluster,
    Manifest,
    PlacementDecision,
    PlacementRef,
    PlacementRule,
    Subscription,
    SubscriptionPhase,
    WorkBundle,
    WorkCondition,
)

from .schema import DecisionPayload

if TYPE_CHECKING:
    from datetime import datetime

    from drhub.domain.model import DecisionMap

    from .schema import (
        ApplicationVolumeReplicationPayload,
        ManagedClusterPayload,
        ManifestWorkPayload,
        PlacementRulePayload,
        SubscriptionPayload,
    )


def translate_intent(payload: ApplicationVolumeReplicationPayload) -> DRIntent:
    decisions = payload.status.decisions if payload.status else {}
    return DRIntent(
        name=payload.metadata.name,
        namespace=payload.metadata.namespace or "",
        s3_endpoint=payload.spec.s3_endpoint,
        s3_secret_name=payload.spec.s3_secret_name,
        failover_clusters=dict(payload.spec.failover_clusters),
        decisions={
            subscription: PlacementDecision(
                home_cluster=decision.home_cluster,
                peer_cluster=decision.peer_cluster,
            )
            for subscription, decision in decisions.items()
        },
        resource_version=payload.metadata.resource_version,
    )


def decisions_to_status(decisions: DecisionMap) -> dict[str, object]:
    return {
        "decisions": {
            subscription: DecisionPayload(
                home_cluster=decision.home_cluster,
                peer_cluster=decision.peer_cluster,
            ).model_dump(by_alias=True)
            for subscription, decision in decisions.items()
        }
    }


def translate_subscription(payload: SubscriptionPayload) -> Subscription:
    placement = payload.spec.placement
    placement_ref: PlacementRef | None = None
    placement_local = False
    if placement is not None:
        placement_local = bool(placement.local)
        if placement.placement_ref is not None and placement.placement_ref.name:
            placement_ref = PlacementRef(
                name=placement.placement_ref.name,
                namespace=placement.placement_ref.namespace or None,
            )

    status = payload.status
    return Subscription(
        name=payload.metadata.name,
        namespace=payload.metadata.namespace or "",
        labels=dict(payload.metadata.labels),
        phase=SubscriptionPhase.parse(status.phase if status else None),
        statuses=dict(status.statuses or {}) if status else {},
        placement_ref=placement_ref,
        placement_local=placement_local,
        resource_version=payload.metadata.resource_version,
    )


def translate_placement_rule(payload: PlacementRulePayload) -> PlacementRule:
    selector = payload.spec.cluster_selector
    return PlacementRule(
        name=payload.metadata.name,
        namespace=payload.metadata.namespace or "",
        cluster_replicas=payload.spec.cluster_replicas,
        cluster_names=tuple(cluster.name for cluster in payload.spec.clusters),
        cluster_selector=dict(selector.match_labels) if selector else {},
    )


def translate_managed_cluster(payload: ManagedClusterPayload) -> ManagedCluster:
    return ManagedCluster(name=payload.metadata.name, labels=dict(payload.metadata.labels))


def as_utc(moment: datetime) -> datetime:
    """Aware UTC timestamp; naive values are taken to be UTC already."""

    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def translate_work(payload: ManifestWorkPayload, *, cluster: str) -> WorkBundle:
    conditions = payload.status.conditions if payload.status else []
    return WorkBundle(
        name=payload.metadata.name,
        cluster=payload.metadata.namespace or cluster,
        manifests=[Manifest(content=manifest) for manifest in payload.spec.workload.manifests],
        labels=dict(payload.metadata.labels),
        conditions=[
            WorkCondition(
                type=condition.type,
                status=condition.status,
                last_transition_time=as_utc(condition.last_transition_time),
                reason=condition.reason,
                message=condition.message,
            )
            for condition in conditions
        ],
        resource_version=payload.metadata.resource_version,
    )


def work_to_payload(bundle: WorkBundle) -> dict[str, object]:
    """Body for create/replace; ``status`` is owned by the managed cluster and never sent."""

    metadata: dict[str, object] = {
        "name": bundle.name,
        "namespace": bundle.cluster,
        "labels": dict(bundle.labels),
    }
    if bundle.resource_version is not None:
        metadata["resourceVersion"] = bundle.resource_version
    return {
        "apiVersion": "work.open-cluster-management.io/v1",
        "kind": "ManifestWork",
        "metadata": metadata,
        "spec": {
            "workload": {"manifests": [dict(manifest.content) for manifest in bundle.manifests]}
        },
    }


def label_patch(key: str, value: str) -> dict[str, object]:
    return {"metadata": {"labels": {key: value}}}
