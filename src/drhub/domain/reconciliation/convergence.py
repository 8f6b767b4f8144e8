"""Idempotent create-or-update of work bundles.

The desired bundle is compared against whatever the hub holds at apply time
(last writer wins, no merge). Failures are surfaced, never retried here.
"""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from drhub.domain.model import work_bundle_name

if TYPE_CHECKING:
    from drhub.domain.model import BundleType, Subscription, WorkBundle
    from drhub.domain.ports import WorkBundleRepository

log = getLogger(__name__)


class ConvergeAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


def converge_work(works: WorkBundleRepository, desired: WorkBundle) -> ConvergeAction:
    """Make the bundle named ``desired.name`` on ``desired.cluster`` carry ``desired``'s payload."""

    existing = works.get(cluster=desired.cluster, name=desired.name)
    if existing is None:
        log.info("Creating work %s on cluster %s", desired.name, desired.cluster)
        works.create(desired)
        return ConvergeAction.CREATED

    if existing.has_same_payload(desired):
        log.debug("Work %s on cluster %s is up to date", desired.name, desired.cluster)
        return ConvergeAction.UNCHANGED

    existing.manifests = list(desired.manifests)
    log.info("Work %s exists on cluster %s. Updating", desired.name, desired.cluster)
    works.update(existing)
    return ConvergeAction.UPDATED


def find_subscription_work(
    works: WorkBundleRepository,
    subscription: Subscription,
    cluster: str | None,
    bundle_type: BundleType,
) -> WorkBundle | None:
    """Look up the ``bundle_type`` bundle owned by ``subscription`` on ``cluster``."""

    if not cluster:
        return None
    name = work_bundle_name(subscription.name, subscription.namespace, bundle_type)
    return works.get(cluster=cluster, name=name)
