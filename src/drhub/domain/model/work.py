"""Work bundles: named per-cluster payload sets applied remotely."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from .enums import ConditionStatus

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from .enums import BundleType

WORK_NAME_FORMAT: Final[str] = "{owner}-{namespace}-{bundle_type}-mw"


def work_bundle_name(owner_name: str, owner_namespace: str, bundle_type: BundleType) -> str:
    """Deterministic bundle name for a subscription-owned work bundle."""

    return WORK_NAME_FORMAT.format(
        owner=owner_name,
        namespace=owner_namespace,
        bundle_type=bundle_type.value,
    )


@dataclass(frozen=True, slots=True)
class Manifest:
    """One serialized payload inside a work bundle.

    ``content`` is JSON-normalised (only dicts, lists, strings, numbers, booleans
    and ``None``) so that desired and observed manifests compare structurally.
    """

    content: Mapping[str, object] = field(hash=False)

    @property
    def kind(self) -> str | None:
        kind = self.content.get("kind")
        return kind if isinstance(kind, str) else None


@dataclass(slots=True, kw_only=True)
class WorkCondition:
    type: str
    status: str
    last_transition_time: datetime
    reason: str | None = None
    message: str | None = None

    @property
    def is_true(self) -> bool:
        return self.status == ConditionStatus.TRUE


@dataclass(slots=True, kw_only=True)
class WorkBundle:
    """Declarative unit addressed by ``(name, cluster)``.

    ``conditions`` are reported asynchronously by the managed cluster and are
    read-only from the engine's perspective.
    """

    name: str
    cluster: str
    manifests: list[Manifest] = field(default_factory=list["Manifest"])
    labels: dict[str, str] = field(default_factory=dict[str, str])
    conditions: list[WorkCondition] = field(default_factory=list["WorkCondition"])
    resource_version: str | None = None

    def has_same_payload(self, other: WorkBundle) -> bool:
        return self.manifests == other.manifests
