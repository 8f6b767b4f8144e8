from __future__ import annotations

from drhub.domain.errors import NoFailoverTargetError, RemoteIOError
from drhub.domain.model import PAUSE_FALSE, PAUSE_LABEL, ConditionType, ObjectRef
from drhub.domain.reconciliation.contracts import RequeueOutcome
from drhub.domain.reconciliation.failover import FailoverSequencer, FailoverState
from drhub.domain.reconciliation.manifests import (
    build_replication_group_work,
    build_restore_work,
)
from tests.helpers.hub import (
    FakeBackupStore,
    FakeHub,
    FakeWorkBundleRepository,
    decision,
    make_condition,
    make_intent,
    make_subscription,
    make_volumes,
)

RESTORE = "app1-apps-pv-mw"
VRG = "app1-apps-vrg-mw"


def _sequencer(hub: FakeHub, backup: FakeBackupStore | None = None) -> FailoverSequencer:
    return FailoverSequencer(hub.repositories(), backup or FakeBackupStore())


def test_missing_failover_target_is_an_error() -> None:
    hub = FakeHub()
    subscription = make_subscription(paused=True)

    report = _sequencer(hub).run(make_intent(), subscription)

    assert isinstance(report.outcome, RequeueOutcome)
    assert isinstance(report.error, NoFailoverTargetError)
    assert report.states == [
        FailoverState.PAUSED_START,
        FailoverState.LOCATE_TARGET,
        FailoverState.ERROR,
    ]
    assert hub.subscriptions.label_writes == []


def test_fresh_failover_issues_restore_and_waits() -> None:
    hub = FakeHub(
        works=FakeWorkBundleRepository(
            [build_replication_group_work("app1", "apps", "east", s3_endpoint="", s3_secret_name="")]
        )
    )
    backup = FakeBackupStore(volumes=make_volumes(3))
    intent = make_intent(failover_clusters={"app1": "west"}, decisions={"app1": decision()})

    report = _sequencer(hub, backup).run(intent, make_subscription(paused=True))

    assert isinstance(report.outcome, RequeueOutcome)
    assert report.target_cluster == "west"
    assert report.final_state is FailoverState.WAIT_APPLIED
    assert report.unpaused is False
    assert hub.works.writes("delete") == [("east", VRG)]
    assert hub.works.writes("create") == [("west", RESTORE)]
    assert len(hub.works.bundles[("west", RESTORE)].manifests) == 3
    assert hub.subscriptions.label_writes == []


def test_stale_work_deletion_precedes_restore() -> None:
    hub = FakeHub()
    backup = FakeBackupStore(volumes=make_volumes(1))
    intent = make_intent(failover_clusters={"app1": "west"}, decisions={"app1": decision()})

    _sequencer(hub, backup).run(intent, make_subscription(paused=True))

    mutations = [call for call in hub.works.calls if call[0] != "get"]
    assert mutations == [("delete", "east", VRG), ("create", "west", RESTORE)]


def test_backup_download_uses_intent_storage_settings() -> None:
    hub = FakeHub()
    backup = FakeBackupStore(volumes=make_volumes(1))
    intent = make_intent(failover_clusters={"App1": "west"})
    subscription = make_subscription("App1", "Apps", paused=True)

    _sequencer(hub, backup).run(intent, subscription)

    assert backup.calls == [
        {
            "endpoint": "https://s3.example.test",
            "credential_ref": ObjectRef(name="s3-secret", namespace="apps"),
            "caller_tag": "avr",
            "bucket": "apps-app1",
        }
    ]


def test_rerun_with_pending_restore_is_idempotent() -> None:
    hub = FakeHub()
    backup = FakeBackupStore(volumes=make_volumes(3))
    intent = make_intent(failover_clusters={"app1": "west"}, decisions={"app1": decision()})
    sequencer = _sequencer(hub, backup)

    first = sequencer.run(intent, make_subscription(paused=True))
    second = sequencer.run(intent, make_subscription(paused=True))

    assert first.outcome == second.outcome
    assert FailoverState.RESTORE_PENDING in second.states
    assert hub.works.writes("create") == [("west", RESTORE)]
    assert hub.works.writes("update") == []
    assert len(backup.calls) == 1
    assert hub.subscriptions.label_writes == []


def test_applied_restore_unpauses_subscription() -> None:
    restore = build_restore_work("app1", "apps", "west", make_volumes(2))
    restore.conditions = [make_condition(ConditionType.APPLIED)]
    hub = FakeHub(works=FakeWorkBundleRepository([restore]))
    subscription = make_subscription(paused=True)
    intent = make_intent(failover_clusters={"app1": "west"}, decisions={"app1": decision()})

    report = _sequencer(hub).run(intent, subscription)

    assert isinstance(report.outcome, RequeueOutcome)
    assert report.unpaused is True
    assert report.states[-3:] == [
        FailoverState.WAIT_APPLIED,
        FailoverState.UNPAUSE,
        FailoverState.DONE,
    ]
    assert hub.subscriptions.label_writes == [("app1", PAUSE_LABEL, PAUSE_FALSE)]
    assert hub.works.writes("delete") == []


def test_degraded_restore_keeps_waiting() -> None:
    restore = build_restore_work("app1", "apps", "west", make_volumes(1))
    restore.conditions = [
        make_condition(ConditionType.APPLIED),
        make_condition(ConditionType.DEGRADED),
    ]
    hub = FakeHub(works=FakeWorkBundleRepository([restore]))
    intent = make_intent(failover_clusters={"app1": "west"})

    report = _sequencer(hub).run(intent, make_subscription(paused=True))

    assert report.final_state is FailoverState.WAIT_APPLIED
    assert hub.subscriptions.label_writes == []


def test_empty_backup_unpauses_without_waiting() -> None:
    hub = FakeHub()
    intent = make_intent(failover_clusters={"app1": "west"})

    report = _sequencer(hub, FakeBackupStore()).run(intent, make_subscription(paused=True))

    assert FailoverState.WAIT_APPLIED not in report.states
    assert FailoverState.DELETE_STALE_ROLE_WORK not in report.states
    assert report.unpaused is True
    assert hub.works.writes("create") == []
    assert hub.subscriptions.label_writes == [("app1", PAUSE_LABEL, PAUSE_FALSE)]


def test_missing_stale_work_is_tolerated() -> None:
    hub = FakeHub()
    intent = make_intent(failover_clusters={"app1": "west"}, decisions={"app1": decision()})

    report = _sequencer(hub, FakeBackupStore(volumes=make_volumes(1))).run(
        intent, make_subscription(paused=True)
    )

    assert report.error is None
    assert hub.works.writes("delete") == [("east", VRG)]
    assert hub.works.writes("create") == [("west", RESTORE)]


def test_backup_failure_requeues_without_restore() -> None:
    hub = FakeHub()
    intent = make_intent(failover_clusters={"app1": "west"})

    report = _sequencer(hub, FakeBackupStore(fail=True)).run(
        intent, make_subscription(paused=True)
    )

    assert isinstance(report.error, RemoteIOError)
    assert report.states[-2:] == [FailoverState.RESTORE_ISSUE, FailoverState.ERROR]
    assert hub.works.writes("create") == []
    assert hub.subscriptions.label_writes == []


def test_unpause_failure_requeues() -> None:
    hub = FakeHub()
    hub.subscriptions.fail_set_label = True
    intent = make_intent(failover_clusters={"app1": "west"})

    report = _sequencer(hub).run(intent, make_subscription(paused=True))

    assert isinstance(report.error, RemoteIOError)
    assert report.states[-2:] == [FailoverState.UNPAUSE, FailoverState.ERROR]
    assert report.unpaused is False
