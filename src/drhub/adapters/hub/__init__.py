"""Hub API server adapter."""

from __future__ import annotations

from .client import HubClient
from .placement import HubClusterResolver
from .repositories import (
    HubDRIntentRepository,
    HubPlacementRuleRepository,
    HubSecretReader,
    HubSubscriptionRepository,
    HubWorkBundleRepository,
    build_hub_repositories,
)

__all__ = [
    "HubClient",
    "HubClusterResolver",
    "HubDRIntentRepository",
    "HubPlacementRuleRepository",
    "HubSecretReader",
    "HubSubscriptionRepository",
    "HubWorkBundleRepository",
    "build_hub_repositories",
]
