"""Reusable in-memory fakes for the hub and backup ports."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from drhub.domain.errors import NotFoundError, ReconcileError, RemoteIOError
from drhub.domain.model import (
    DR_STATE_LABEL,
    DR_STATE_PROTECTED,
    PAUSE_LABEL,
    PAUSE_TRUE,
    ConditionStatus,
    ConditionType,
    DRIntent,
    ManagedCluster,
    PlacementDecision,
    PlacementRef,
    PlacementRule,
    Subscription,
    SubscriptionPhase,
    VolumeRecord,
    WorkCondition,
)
from drhub.domain.ports import HubRepositories

if TYPE_CHECKING:
    from collections.abc import Iterable

    from drhub.domain.model import DecisionMap, ObjectRef, WorkBundle
    from drhub.domain.ports import ClusterMap


def at(seconds: int) -> datetime:
    return datetime(2024, 1, 1, tzinfo=UTC).replace(second=seconds)


def make_condition(
    condition_type: str = ConditionType.APPLIED,
    status: str = ConditionStatus.TRUE,
    *,
    seconds: int = 5,
) -> WorkCondition:
    return WorkCondition(type=condition_type, status=status, last_transition_time=at(seconds))


def make_intent(
    name: str = "avr",
    namespace: str = "apps",
    *,
    failover_clusters: dict[str, str] | None = None,
    decisions: DecisionMap | None = None,
) -> DRIntent:
    return DRIntent(
        name=name,
        namespace=namespace,
        s3_endpoint="https://s3.example.test",
        s3_secret_name="s3-secret",
        failover_clusters=failover_clusters or {},
        decisions=decisions or {},
    )


def make_subscription(
    name: str = "app1",
    namespace: str = "apps",
    *,
    phase: SubscriptionPhase = SubscriptionPhase.PROPAGATED,
    statuses: Iterable[str] = ("east",),
    placement: str | None = "app1-placement",
    paused: bool = False,
    local: bool = False,
) -> Subscription:
    labels: dict[str, str] = {}
    if paused:
        labels = {DR_STATE_LABEL: DR_STATE_PROTECTED, PAUSE_LABEL: PAUSE_TRUE}
    return Subscription(
        name=name,
        namespace=namespace,
        labels=labels,
        phase=phase,
        statuses={cluster: {"packages": {}} for cluster in statuses},
        placement_ref=PlacementRef(name=placement) if placement else None,
        placement_local=local,
    )


def make_rule(
    name: str = "app1-placement",
    namespace: str = "apps",
    *,
    cluster_replicas: int | None = 1,
) -> PlacementRule:
    return PlacementRule(name=name, namespace=namespace, cluster_replicas=cluster_replicas)


def make_volumes(count: int) -> list[VolumeRecord]:
    return [
        VolumeRecord(
            name=f"pv-{index}",
            payload={"apiVersion": "v1", "kind": "PersistentVolume", "metadata": {"name": f"pv-{index}"}},
        )
        for index in range(count)
    ]


class FakeWorkBundleRepository:
    """Dict-backed work store recording every write."""

    def __init__(self, bundles: Iterable[WorkBundle] = ()) -> None:
        self.bundles: dict[tuple[str, str], WorkBundle] = {}
        for bundle in bundles:
            self.bundles[(bundle.cluster, bundle.name)] = copy.deepcopy(bundle)
        self.calls: list[tuple[str, str, str]] = []
        self.fail_on: dict[tuple[str, str], ReconcileError] = {}

    def _check(self, operation: str, name: str) -> None:
        error = self.fail_on.get((operation, name))
        if error is not None:
            raise error

    def get(self, *, cluster: str, name: str) -> WorkBundle | None:
        self.calls.append(("get", cluster, name))
        self._check("get", name)
        bundle = self.bundles.get((cluster, name))
        return copy.deepcopy(bundle) if bundle is not None else None

    def create(self, bundle: WorkBundle) -> None:
        self.calls.append(("create", bundle.cluster, bundle.name))
        self._check("create", bundle.name)
        self.bundles[(bundle.cluster, bundle.name)] = copy.deepcopy(bundle)

    def update(self, bundle: WorkBundle) -> None:
        self.calls.append(("update", bundle.cluster, bundle.name))
        self._check("update", bundle.name)
        self.bundles[(bundle.cluster, bundle.name)] = copy.deepcopy(bundle)

    def delete(self, *, cluster: str, name: str) -> None:
        self.calls.append(("delete", cluster, name))
        self._check("delete", name)
        if self.bundles.pop((cluster, name), None) is None:
            raise NotFoundError(f"{name} not found on {cluster}")

    def writes(self, operation: str) -> list[tuple[str, str]]:
        return [(cluster, name) for op, cluster, name in self.calls if op == operation]


@dataclass(slots=True)
class FakeSubscriptionRepository:
    subscriptions: list[Subscription] = field(default_factory=list["Subscription"])
    fail_list: bool = False
    fail_set_label: bool = False
    label_writes: list[tuple[str, str, str]] = field(default_factory=list[tuple[str, str, str]])

    def list_namespace(self, *, namespace: str) -> list[Subscription]:
        if self.fail_list:
            raise RemoteIOError("list failed")
        return [sub for sub in self.subscriptions if sub.namespace == namespace]

    def set_label(self, subscription: Subscription, *, key: str, value: str) -> None:
        if self.fail_set_label:
            raise RemoteIOError("patch failed")
        self.label_writes.append((subscription.name, key, value))
        subscription.labels[key] = value


@dataclass(slots=True)
class FakePlacementRuleRepository:
    rules: dict[tuple[str, str], PlacementRule] = field(
        default_factory=dict[tuple[str, str], PlacementRule]
    )
    fail_for: set[str] = field(default_factory=set[str])

    def add(self, rule: PlacementRule) -> None:
        self.rules[(rule.namespace, rule.name)] = rule

    def get(self, *, namespace: str, name: str) -> PlacementRule | None:
        if name in self.fail_for:
            raise RemoteIOError(f"get placement rule {name} failed")
        return self.rules.get((namespace, name))


@dataclass(slots=True)
class FakeDRIntentRepository:
    intents: dict[tuple[str, str], DRIntent] = field(
        default_factory=dict[tuple[str, str], DRIntent]
    )
    fail_get: bool = False
    fail_replace: bool = False
    replaced: list[DecisionMap] = field(default_factory=list["DecisionMap"])

    def add(self, intent: DRIntent) -> None:
        self.intents[(intent.namespace, intent.name)] = intent

    def get(self, *, namespace: str, name: str) -> DRIntent | None:
        if self.fail_get:
            raise RemoteIOError("get intent failed")
        intent = self.intents.get((namespace, name))
        return copy.deepcopy(intent) if intent is not None else None

    def replace_decisions(self, intent: DRIntent, decisions: DecisionMap) -> None:
        if self.fail_replace:
            raise RemoteIOError("status update failed")
        self.replaced.append(dict(decisions))
        stored = self.intents[(intent.namespace, intent.name)]
        stored.decisions = dict(decisions)


@dataclass(slots=True)
class FakeBackupStore:
    volumes: list[VolumeRecord] = field(default_factory=list["VolumeRecord"])
    fail: bool = False
    calls: list[dict[str, object]] = field(default_factory=list[dict[str, object]])

    def download_volumes(
        self,
        *,
        endpoint: str,
        credential_ref: ObjectRef,
        caller_tag: str,
        bucket: str,
    ) -> list[VolumeRecord]:
        self.calls.append(
            {
                "endpoint": endpoint,
                "credential_ref": credential_ref,
                "caller_tag": caller_tag,
                "bucket": bucket,
            }
        )
        if self.fail:
            raise RemoteIOError("backup store unreachable")
        return list(self.volumes)


@dataclass(slots=True)
class FakeClusterResolver:
    names: tuple[str, ...] = ("east", "west")
    calls: int = 0

    def __call__(self, rule: PlacementRule) -> ClusterMap:
        self.calls += 1
        return {name: ManagedCluster(name=name) for name in self.names}


@dataclass(slots=True)
class FakeHub:
    """All fakes bundled as ``HubRepositories``."""

    intents: FakeDRIntentRepository = field(default_factory=FakeDRIntentRepository)
    subscriptions: FakeSubscriptionRepository = field(default_factory=FakeSubscriptionRepository)
    placements: FakePlacementRuleRepository = field(default_factory=FakePlacementRuleRepository)
    works: FakeWorkBundleRepository = field(default_factory=FakeWorkBundleRepository)

    def repositories(self) -> HubRepositories:
        return HubRepositories(
            intents=self.intents,
            subscriptions=self.subscriptions,
            placements=self.placements,
            works=self.works,
        )


def decision(home: str = "east", peer: str = "west") -> PlacementDecision:
    return PlacementDecision(home_cluster=home, peer_cluster=peer)
