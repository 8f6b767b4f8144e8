"""Hub API server client.

Every public method is synchronous and runs one request through a fresh
``ResilientClient``. All of them draw from the one rate limiter owned by the
``HubClient``. A 404 on a read is reported as ``None``; every other
failure surfaces as ``RemoteIOError`` (``NotFoundError`` for a 404 on delete).
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from drhub.adapters.http_resilience import ResilientClient, build_limiter
from drhub.domain.errors import NotFoundError, RemoteIOError

from .schema import (
    ApplicationVolumeReplicationPayload,
    ManagedClusterList,
    ManagedClusterPayload,
    ManifestWorkPayload,
    PlacementRulePayload,
    SecretPayload,
    SubscriptionList,
    SubscriptionPayload,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from aiolimiter import AsyncLimiter

    from drhub.config.http_resilience import ResilienceConfig
    from drhub.config.hub import HubConfig

log = getLogger(__name__)

INTENT_GROUP_VERSION = "ramendr.openshift.io/v1alpha1"
INTENT_KIND = "ApplicationVolumeReplication"
INTENT_PLURAL = "applicationvolumereplications"
SUBSCRIPTION_GROUP_VERSION = "apps.open-cluster-management.io/v1"
WORK_GROUP_VERSION = "work.open-cluster-management.io/v1"
CLUSTER_GROUP_VERSION = "cluster.open-cluster-management.io/v1"

MERGE_PATCH = {"Content-Type": "application/merge-patch+json"}
LIST_PAGE_SIZE = 250


def intent_path(namespace: str, name: str) -> str:
    return f"/apis/{INTENT_GROUP_VERSION}/namespaces/{namespace}/{INTENT_PLURAL}/{name}"


def subscriptions_path(namespace: str) -> str:
    return f"/apis/{SUBSCRIPTION_GROUP_VERSION}/namespaces/{namespace}/subscriptions"


def placement_rule_path(namespace: str, name: str) -> str:
    return f"/apis/{SUBSCRIPTION_GROUP_VERSION}/namespaces/{namespace}/placementrules/{name}"


def works_path(cluster: str) -> str:
    return f"/apis/{WORK_GROUP_VERSION}/namespaces/{cluster}/manifestworks"


def managed_clusters_path() -> str:
    return f"/apis/{CLUSTER_GROUP_VERSION}/managedclusters"


def secret_path(namespace: str, name: str) -> str:
    return f"/api/v1/namespaces/{namespace}/secrets/{name}"


class HubClient:
    """Low-level HTTP client for the hub cluster's API server."""

    def __init__(
        self,
        *,
        config: HubConfig,
        client_factory: Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient]
        | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._limiter = build_limiter(config.resilience.ratelimit)
        self._client_factory = client_factory or ResilientClient

    # DR intents

    def get_intent(
        self, *, namespace: str, name: str
    ) -> ApplicationVolumeReplicationPayload | None:
        return asyncio.run(
            self._get_async(intent_path(namespace, name), ApplicationVolumeReplicationPayload)
        )

    def replace_intent_status(
        self,
        *,
        namespace: str,
        name: str,
        resource_version: str | None,
        status: dict[str, object],
    ) -> None:
        metadata: dict[str, object] = {"name": name, "namespace": namespace}
        if resource_version is not None:
            metadata["resourceVersion"] = resource_version
        body = {
            "apiVersion": INTENT_GROUP_VERSION,
            "kind": INTENT_KIND,
            "metadata": metadata,
            "status": status,
        }
        asyncio.run(self._send_async("PUT", f"{intent_path(namespace, name)}/status", json=body))

    # Subscriptions

    def list_subscriptions(self, *, namespace: str) -> list[SubscriptionPayload]:
        return asyncio.run(self._list_subscriptions_async(namespace=namespace))

    def patch_subscription(self, *, namespace: str, name: str, patch: dict[str, object]) -> None:
        asyncio.run(
            self._send_async(
                "PATCH",
                f"{subscriptions_path(namespace)}/{name}",
                json=patch,
                headers=MERGE_PATCH,
            )
        )

    # Placement

    def get_placement_rule(self, *, namespace: str, name: str) -> PlacementRulePayload | None:
        return asyncio.run(
            self._get_async(placement_rule_path(namespace, name), PlacementRulePayload)
        )

    def list_managed_clusters(self) -> list[ManagedClusterPayload]:
        listing = asyncio.run(self._get_async(managed_clusters_path(), ManagedClusterList))
        return listing.items if listing is not None else []

    # Work

    def get_work(self, *, cluster: str, name: str) -> ManifestWorkPayload | None:
        return asyncio.run(self._get_async(f"{works_path(cluster)}/{name}", ManifestWorkPayload))

    def create_work(self, *, cluster: str, body: dict[str, object]) -> None:
        asyncio.run(self._send_async("POST", works_path(cluster), json=body))

    def replace_work(self, *, cluster: str, name: str, body: dict[str, object]) -> None:
        asyncio.run(self._send_async("PUT", f"{works_path(cluster)}/{name}", json=body))

    def delete_work(self, *, cluster: str, name: str) -> None:
        path = f"{works_path(cluster)}/{name}"
        response = asyncio.run(self._send_async("DELETE", path, allow_not_found=True))
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(f"manifest work {name} not found on cluster {cluster}")

    # Secrets

    def get_secret(self, *, namespace: str, name: str) -> SecretPayload | None:
        return asyncio.run(self._get_async(secret_path(namespace, name), SecretPayload))

    # internals

    def _url(self, path: str) -> str:
        return f"{self._config.api_url}{path}"

    async def _list_subscriptions_async(self, *, namespace: str) -> list[SubscriptionPayload]:
        items: list[SubscriptionPayload] = []
        params: dict[str, str] = {"limit": str(LIST_PAGE_SIZE)}
        async with self._client_factory(self._resilience, self._limiter) as client:
            while True:
                response = await self._perform(
                    client, "GET", subscriptions_path(namespace), params=params
                )
                page = _validate(SubscriptionList, response)
                items.extend(page.items)
                if not page.metadata.continue_token:
                    return items
                params["continue"] = page.metadata.continue_token

    async def _get_async[M: BaseModel](self, path: str, model: type[M]) -> M | None:
        async with self._client_factory(self._resilience, self._limiter) as client:
            response = await self._perform(client, "GET", path, allow_not_found=True)
        if response.status_code == httpx.codes.NOT_FOUND:
            log.debug("GET %s: not found", path)
            return None
        return _validate(model, response)

    async def _send_async(
        self,
        method: str,
        path: str,
        *,
        json: object | None = None,
        headers: dict[str, str] | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response:
        async with self._client_factory(self._resilience, self._limiter) as client:
            return await self._perform(
                client,
                method,
                path,
                json=json,
                headers=headers,
                allow_not_found=allow_not_found,
            )

    async def _perform(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        json: object | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response:
        log.debug("%s %s", method, path)
        try:
            response = await client.request(
                method,
                self._url(path),
                json=json,
                headers=headers,
                params=params,
            )
        except httpx.HTTPError as exc:
            raise RemoteIOError(f"{method} {path} failed: {exc}") from exc

        if allow_not_found and response.status_code == httpx.codes.NOT_FOUND:
            return response
        if response.is_error:
            raise RemoteIOError(
                f"{method} {path} returned {response.status_code}: {_reason(response)}",
                status_code=response.status_code,
            )
        return response


def _validate[M: BaseModel](model: type[M], response: httpx.Response) -> M:
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise RemoteIOError(
            f"unexpected payload from {response.request.url.path}: {exc}"
        ) from exc


def _reason(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(payload, dict):
        message = payload.get("message")  # pyright: ignore[reportUnknownMemberType, reportUnknownVariableType]
        if isinstance(message, str):
            return message
    return response.reason_phrase
