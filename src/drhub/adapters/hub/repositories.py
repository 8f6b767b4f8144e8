"""Hub-backed implementations of the domain persistence ports."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from drhub.domain.ports import HubRepositories

from .translator import (
    decisions_to_status,
    label_patch,
    translate_intent,
    translate_placement_rule,
    translate_subscription,
    translate_work,
    work_to_payload,
)

if TYPE_CHECKING:
    from drhub.domain.model import (
        DecisionMap,
        DRIntent,
        ObjectRef,
        PlacementRule,
        Subscription,
        WorkBundle,
    )

    from .client import HubClient

log = getLogger(__name__)


@dataclass(slots=True)
class HubDRIntentRepository:
    client: HubClient

    def get(self, *, namespace: str, name: str) -> DRIntent | None:
        payload = self.client.get_intent(namespace=namespace, name=name)
        return translate_intent(payload) if payload is not None else None

    def replace_decisions(self, intent: DRIntent, decisions: DecisionMap) -> None:
        log.info("Updating status of DR intent %s with %d decisions", intent.ref, len(decisions))
        self.client.replace_intent_status(
            namespace=intent.namespace,
            name=intent.name,
            resource_version=intent.resource_version,
            status=decisions_to_status(decisions),
        )


@dataclass(slots=True)
class HubSubscriptionRepository:
    client: HubClient

    def list_namespace(self, *, namespace: str) -> list[Subscription]:
        return [
            translate_subscription(payload)
            for payload in self.client.list_subscriptions(namespace=namespace)
        ]

    def set_label(self, subscription: Subscription, *, key: str, value: str) -> None:
        self.client.patch_subscription(
            namespace=subscription.namespace,
            name=subscription.name,
            patch=label_patch(key, value),
        )
        subscription.labels[key] = value


@dataclass(slots=True)
class HubPlacementRuleRepository:
    client: HubClient

    def get(self, *, namespace: str, name: str) -> PlacementRule | None:
        payload = self.client.get_placement_rule(namespace=namespace, name=name)
        return translate_placement_rule(payload) if payload is not None else None


@dataclass(slots=True)
class HubWorkBundleRepository:
    client: HubClient

    def get(self, *, cluster: str, name: str) -> WorkBundle | None:
        payload = self.client.get_work(cluster=cluster, name=name)
        return translate_work(payload, cluster=cluster) if payload is not None else None

    def create(self, bundle: WorkBundle) -> None:
        self.client.create_work(cluster=bundle.cluster, body=work_to_payload(bundle))

    def update(self, bundle: WorkBundle) -> None:
        self.client.replace_work(
            cluster=bundle.cluster,
            name=bundle.name,
            body=work_to_payload(bundle),
        )

    def delete(self, *, cluster: str, name: str) -> None:
        self.client.delete_work(cluster=cluster, name=name)


def build_hub_repositories(client: HubClient) -> HubRepositories:
    return HubRepositories(
        intents=HubDRIntentRepository(client),
        subscriptions=HubSubscriptionRepository(client),
        placements=HubPlacementRuleRepository(client),
        works=HubWorkBundleRepository(client),
    )


@dataclass(slots=True)
class HubSecretReader:
    """Read a secret's raw (base64-encoded) data map."""

    client: HubClient

    def __call__(self, ref: ObjectRef) -> dict[str, str] | None:
        payload = self.client.get_secret(namespace=ref.namespace, name=ref.name)
        return dict(payload.data) if payload is not None else None
