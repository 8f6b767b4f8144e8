"""Replication-group policy applied to every protected application."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

DEFAULT_PVC_SELECTOR: Final[dict[str, str]] = {
    "appclass": "gold",
    "environment": "dev.AZ1",
}
DEFAULT_REPLICATION_CLASS: Final[str] = "volume-rep-class"
PRIMARY_REPLICATION_STATE: Final[str] = "Primary"


@dataclass(frozen=True, slots=True)
class ReplicationPolicy:
    """Fixed selection policy; per-application policy is not modelled."""

    pvc_selector: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_PVC_SELECTOR), hash=False
    )
    replication_class: str = DEFAULT_REPLICATION_CLASS
    replication_state: str = PRIMARY_REPLICATION_STATE
