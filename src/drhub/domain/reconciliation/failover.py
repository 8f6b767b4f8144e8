"""Failover sequence for a subscription paused for DR.

States::

    PAUSED_START -> LOCATE_TARGET -> CHECK_EXISTING_RESTORE
        -> RESTORE_PENDING                                   -> WAIT_APPLIED
        -> RESTORE_CLEAN -> DELETE_STALE_ROLE_WORK -> RESTORE_ISSUE -> WAIT_APPLIED
    WAIT_APPLIED -> UNPAUSE -> DONE

``RESTORE_ISSUE`` goes straight to ``UNPAUSE`` when nothing was backed up.
``ERROR`` is reachable from every state. Every run ends in a requeue: either
the restore is not applied yet, or the subscription was just unpaused and the
next pass has to pick it up on the convergence path.

Stale-role deletion, restore, applied-wait and unpause run strictly in that order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from drhub.domain.errors import NoFailoverTargetError, NotFoundError, ReconcileError
from drhub.domain.model import PAUSE_FALSE, PAUSE_LABEL, BundleType, work_bundle_name
from drhub.domain.ports.backup import volume_bucket_name

from .conditions import is_work_applied
from .contracts import RequeueOutcome
from .convergence import converge_work, find_subscription_work
from .manifests import build_restore_work

if TYPE_CHECKING:
    from drhub.domain.model import DRIntent, Subscription, VolumeRecord, WorkBundle
    from drhub.domain.ports import BackupStore, HubRepositories

log = getLogger(__name__)


class FailoverState(StrEnum):
    PAUSED_START = "paused_start"
    LOCATE_TARGET = "locate_target"
    CHECK_EXISTING_RESTORE = "check_existing_restore"
    RESTORE_PENDING = "restore_pending"
    RESTORE_CLEAN = "restore_clean"
    DELETE_STALE_ROLE_WORK = "delete_stale_role_work"
    RESTORE_ISSUE = "restore_issue"
    WAIT_APPLIED = "wait_applied"
    UNPAUSE = "unpause"
    DONE = "done"
    ERROR = "error"


@dataclass(slots=True, kw_only=True)
class FailoverReport:
    """Trace of one failover run, returned alongside its outcome."""

    subscription: str
    outcome: RequeueOutcome
    states: list[FailoverState] = field(default_factory=list["FailoverState"])
    target_cluster: str | None = None
    error: ReconcileError | None = None

    @property
    def final_state(self) -> FailoverState:
        return self.states[-1]

    @property
    def unpaused(self) -> bool:
        return FailoverState.DONE in self.states


@dataclass(slots=True)
class _Run:
    intent: DRIntent
    subscription: Subscription
    states: list[FailoverState] = field(default_factory=list["FailoverState"])
    target_cluster: str | None = None

    def enter(self, state: FailoverState) -> None:
        log.debug("Failover %s: -> %s", self.subscription.ref, state.value)
        self.states.append(state)

    def report(self, reason: str, *, error: ReconcileError | None = None) -> FailoverReport:
        return FailoverReport(
            subscription=self.subscription.name,
            outcome=RequeueOutcome(reason=reason),
            states=list(self.states),
            target_cluster=self.target_cluster,
            error=error,
        )


@dataclass(slots=True)
class FailoverSequencer:
    """Drive paused -> restore -> unpause for one subscription per call."""

    repositories: HubRepositories
    backup: BackupStore

    def run(self, intent: DRIntent, subscription: Subscription) -> FailoverReport:
        log.info("Processing paused subscription %s", subscription.ref)
        run = _Run(intent=intent, subscription=subscription)
        run.enter(FailoverState.PAUSED_START)
        try:
            return self._advance(run)
        except ReconcileError as exc:
            run.enter(FailoverState.ERROR)
            log.error(
                "Failover of subscription %s (intent %s) failed in state %s: %s",
                subscription.ref,
                intent.ref,
                run.states[-2].value,
                exc,
            )
            return run.report(f"failover error: {exc}", error=exc)

    def _advance(self, run: _Run) -> FailoverReport:
        subscription = run.subscription

        run.enter(FailoverState.LOCATE_TARGET)
        target = run.intent.failover_cluster_for(subscription.name)
        if target is None:
            raise NoFailoverTargetError(
                f"no failover cluster declared for subscription {subscription.name} "
                f"in intent {run.intent.ref}"
            )
        run.target_cluster = target

        run.enter(FailoverState.CHECK_EXISTING_RESTORE)
        restore = find_subscription_work(
            self.repositories.works, subscription, target, BundleType.VOLUME_RESTORE
        )

        if restore is not None:
            run.enter(FailoverState.RESTORE_PENDING)
            log.info("Found restore work %s on cluster %s", restore.name, target)
        else:
            run.enter(FailoverState.RESTORE_CLEAN)
            self._delete_stale_role_work(run)

            run.enter(FailoverState.RESTORE_ISSUE)
            volumes = self._download_volumes(run)
            if not volumes:
                log.info("No volumes backed up for subscription %s", subscription.ref)
                return self._unpause(run)
            self._issue_restore(run, target, volumes)
            restore = find_subscription_work(
                self.repositories.works, subscription, target, BundleType.VOLUME_RESTORE
            )

        run.enter(FailoverState.WAIT_APPLIED)
        if not _restore_applied(restore):
            log.info(
                "Restore work for subscription %s has not been applied on %s yet",
                subscription.ref,
                target,
            )
            return run.report(f"waiting for restore on {target}")

        return self._unpause(run)

    def _delete_stale_role_work(self, run: _Run) -> None:
        previous = run.intent.decision_for(run.subscription.name)
        if previous is None:
            return

        run.enter(FailoverState.DELETE_STALE_ROLE_WORK)
        name = work_bundle_name(
            run.subscription.name,
            run.subscription.namespace,
            BundleType.REPLICATION_GROUP,
        )
        log.info("Deleting work %s on previous home cluster %s", name, previous.home_cluster)
        try:
            self.repositories.works.delete(cluster=previous.home_cluster, name=name)
        except NotFoundError:
            log.debug("Work %s already absent from %s", name, previous.home_cluster)

    def _download_volumes(self, run: _Run) -> list[VolumeRecord]:
        intent = run.intent
        subscription = run.subscription
        bucket = volume_bucket_name(subscription.namespace, subscription.name)
        volumes = self.backup.download_volumes(
            endpoint=intent.s3_endpoint,
            credential_ref=intent.credential_ref,
            caller_tag=intent.name,
            bucket=bucket,
        )
        log.info(
            "Found %d volumes for subscription %s in bucket %s",
            len(volumes),
            subscription.ref,
            bucket,
        )
        return volumes

    def _issue_restore(self, run: _Run, target: str, volumes: list[VolumeRecord]) -> None:
        subscription = run.subscription
        desired = build_restore_work(subscription.name, subscription.namespace, target, volumes)
        log.info(
            "Restoring %d volumes of subscription %s to cluster %s",
            len(volumes),
            subscription.ref,
            target,
        )
        converge_work(self.repositories.works, desired)

    def _unpause(self, run: _Run) -> FailoverReport:
        run.enter(FailoverState.UNPAUSE)
        log.info(
            "Unpausing subscription %s for new home cluster %s",
            run.subscription.ref,
            run.target_cluster,
        )
        self.repositories.subscriptions.set_label(
            run.subscription, key=PAUSE_LABEL, value=PAUSE_FALSE
        )
        run.enter(FailoverState.DONE)
        log.info(
            "Subscription %s unpaused; it will be processed in the next pass",
            run.subscription.ref,
        )
        return run.report("unpaused; converge on next pass")


def _restore_applied(restore: WorkBundle | None) -> bool:
    if restore is None:
        return False
    return is_work_applied(restore.conditions)
