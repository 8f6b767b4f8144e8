"""Orchestrator for one reconciliation pass over a DR intent.

The engine composes the classifier, the placement selector, the convergence
helpers and the failover sequencer. It holds no state between passes: every
pass re-reads the intent and its subscriptions, and decisions from previous
passes are only known through the intent's status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from drhub.domain.errors import ReconcileError, RemoteIOError
from drhub.domain.model import ReplicationPolicy

from .classify import classify_subscription
from .contracts import (
    DecisionOutcome,
    RequeueOutcome,
    SkipOutcome,
    SubscriptionPath,
)
from .convergence import converge_work
from .failover import FailoverSequencer
from .manifests import build_replication_group_work, build_roles_work

if TYPE_CHECKING:
    from drhub.domain.model import DecisionMap, DRIntent, Subscription
    from drhub.domain.ports import BackupStore, HubRepositories

    from .contracts import OutcomesBySubscription, SubscriptionOutcome
    from .placement import PlacementSelector

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class ReconcileResult:
    """Aggregate verdict of one pass.

    ``decisions`` holds only the decisions computed in this pass; the map
    written to the intent's status also carries the retained older entries.
    """

    requeue: bool = False
    decisions: DecisionMap = field(default_factory=dict)
    status_written: bool = False
    outcomes: OutcomesBySubscription = field(default_factory=dict)

    @classmethod
    def requeue_only(cls) -> ReconcileResult:
        return cls(requeue=True)


@dataclass(slots=True)
class ReconcileEngine:
    """Run a full reconciliation pass for one DR intent."""

    repositories: HubRepositories
    backup: BackupStore
    placement: PlacementSelector
    policy: ReplicationPolicy = field(default_factory=ReplicationPolicy)

    def reconcile(self, *, namespace: str, name: str) -> ReconcileResult:
        log.info("Reconciling DR intent %s/%s", namespace, name)

        try:
            intent = self.repositories.intents.get(namespace=namespace, name=name)
        except RemoteIOError as exc:
            log.error("Failed to get DR intent %s/%s: %s", namespace, name, exc)
            return ReconcileResult.requeue_only()

        if intent is None:
            log.info("DR intent %s/%s not found; nothing to do", namespace, name)
            return ReconcileResult()

        try:
            subscriptions = self.repositories.subscriptions.list_namespace(namespace=namespace)
        except RemoteIOError as exc:
            log.error("Failed to list subscriptions in namespace %s: %s", namespace, exc)
            return ReconcileResult.requeue_only()

        outcomes: OutcomesBySubscription = {}
        for subscription in subscriptions:
            outcomes[subscription.name] = self._process(intent, subscription)

        return self._fold(intent, outcomes)

    def _process(self, intent: DRIntent, subscription: Subscription) -> SubscriptionOutcome:
        try:
            classification = classify_subscription(
                subscription,
                intent=intent,
                works=self.repositories.works,
            )
            log.debug("Subscription %s classified as %s", subscription.ref, classification.path)

            match classification.path:
                case SubscriptionPath.SKIP:
                    return SkipOutcome(reason=classification.reason)
                case SubscriptionPath.CONVERGED:
                    return SkipOutcome(reason=classification.reason)
                case SubscriptionPath.PAUSED_FOR_DR:
                    report = FailoverSequencer(self.repositories, self.backup).run(
                        intent, subscription
                    )
                    return report.outcome
                case SubscriptionPath.NEEDS_CONVERGENCE:
                    return self._converge(intent, subscription)
        except ReconcileError as exc:
            log.error(
                "Failed to process subscription %s for DR intent %s: %s",
                subscription.ref,
                intent.ref,
                exc,
            )
            return RequeueOutcome(reason=str(exc))

    def _converge(self, intent: DRIntent, subscription: Subscription) -> DecisionOutcome:
        decision = self.placement(subscription)

        converge_work(self.repositories.works, build_roles_work(decision.home_cluster))
        converge_work(
            self.repositories.works,
            build_replication_group_work(
                subscription.name,
                subscription.namespace,
                decision.home_cluster,
                s3_endpoint=intent.s3_endpoint,
                s3_secret_name=intent.s3_secret_name,
                policy=self.policy,
            ),
        )
        return DecisionOutcome(decision=decision)

    def _fold(self, intent: DRIntent, outcomes: OutcomesBySubscription) -> ReconcileResult:
        result = ReconcileResult(outcomes=outcomes)
        for subscription_name, outcome in outcomes.items():
            if isinstance(outcome, RequeueOutcome):
                result.requeue = True
            elif isinstance(outcome, DecisionOutcome):
                result.decisions[subscription_name] = outcome.decision

        if not result.decisions:
            log.info(
                "DR intent %s: no new decisions (requeue=%s)", intent.ref, result.requeue
            )
            return result

        merged: DecisionMap = dict(intent.decisions)
        merged.update(result.decisions)
        try:
            self.repositories.intents.replace_decisions(intent, merged)
        except RemoteIOError as exc:
            log.error("Failed to update status of DR intent %s: %s", intent.ref, exc)
            result.requeue = True
            return result

        result.status_written = True
        log.info(
            "DR intent %s: recorded %d decisions (requeue=%s)",
            intent.ref,
            len(merged),
            result.requeue,
        )
        return result
