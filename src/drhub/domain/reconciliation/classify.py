"""Decide which path a subscription takes through a reconciliation pass."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from drhub.domain.model import BundleType

from .contracts import Classification, SubscriptionPath
from .convergence import find_subscription_work

if TYPE_CHECKING:
    from drhub.domain.model import DRIntent, Subscription
    from drhub.domain.ports import WorkBundleRepository

log = getLogger(__name__)


def classify_subscription(
    subscription: Subscription,
    *,
    intent: DRIntent,
    works: WorkBundleRepository,
) -> Classification:
    """Run the ordered predicate chain; the first match wins.

    1. managed-cluster copies and local placements are skipped
    2. subscriptions labelled protected and paused go through failover
    3. a recorded decision whose replication-group work still exists is converged
    4. everything else needs convergence

    Only reads are performed; store failures propagate as ``RemoteIOError``.
    """

    if subscription.is_managed_cluster_copy:
        return Classification(
            path=SubscriptionPath.SKIP,
            reason="managed cluster or local subscription",
        )

    if subscription.is_paused_for_dr:
        return Classification(path=SubscriptionPath.PAUSED_FOR_DR)

    decision = intent.decision_for(subscription.name)
    if decision is not None:
        existing = find_subscription_work(
            works,
            subscription,
            decision.home_cluster,
            BundleType.REPLICATION_GROUP,
        )
        if existing is not None:
            log.debug(
                "Replication group work %s exists on %s", existing.name, decision.home_cluster
            )
            return Classification(
                path=SubscriptionPath.CONVERGED,
                decision=decision,
                reason=f"replication group work present on {decision.home_cluster}",
            )

    return Classification(path=SubscriptionPath.NEEDS_CONVERGENCE, decision=decision)
