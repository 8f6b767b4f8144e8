"""Ports for reading and writing objects held by the hub's declarative store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from drhub.domain.model import (
        DecisionMap,
        DRIntent,
        PlacementRule,
        Subscription,
        WorkBundle,
    )


@runtime_checkable
class DRIntentRepository(Protocol):
    """Persistence contract for DR intent objects."""

    def get(self, *, namespace: str, name: str) -> DRIntent | None: ...

    def replace_decisions(self, intent: DRIntent, decisions: DecisionMap) -> None:
        """Atomically replace the whole decision map in the intent's status."""
        ...


@runtime_checkable
class SubscriptionRepository(Protocol):
    """Read access to subscriptions plus the single label write the engine performs."""

    def list_namespace(self, *, namespace: str) -> list[Subscription]: ...

    def set_label(self, subscription: Subscription, *, key: str, value: str) -> None: ...


@runtime_checkable
class PlacementRuleRepository(Protocol):
    def get(self, *, namespace: str, name: str) -> PlacementRule | None: ...


@runtime_checkable
class WorkBundleRepository(Protocol):
    """Persistence contract for work bundles addressed by ``(cluster, name)``.

    ``get`` returns ``None`` when the bundle does not exist; ``delete`` raises
    ``NotFoundError`` in that case. Every other failure is ``RemoteIOError``.
    """

    def get(self, *, cluster: str, name: str) -> WorkBundle | None: ...

    def create(self, bundle: WorkBundle) -> None: ...

    def update(self, bundle: WorkBundle) -> None: ...

    def delete(self, *, cluster: str, name: str) -> None: ...


@dataclass(slots=True)
class HubRepositories:
    """Repositories required to reconcile one DR intent."""

    intents: DRIntentRepository
    subscriptions: SubscriptionRepository
    placements: PlacementRuleRepository
    works: WorkBundleRepository
