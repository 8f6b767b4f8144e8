from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

import pytest

from drhub.config import MissingConfigurationError
from drhub.domain.reconciliation import ReconcileResult
from drhub.ui import cli

if TYPE_CHECKING:
    from drhub.domain.reconciliation import ReconcileEngine


def _args(**overrides: object) -> argparse.Namespace:
    values: dict[str, object] = {"interval": 30.0, "watch": True}
    values.update(overrides)
    return argparse.Namespace(**values)


def test_parse_reconcile_arguments() -> None:
    args = cli._parse_args(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        ["reconcile", "--namespace", "apps", "--name", "avr", "--watch", "--interval", "10"]
    )

    assert args.command == "reconcile"
    assert (args.namespace, args.name) == ("apps", "avr")
    assert args.watch is True
    assert args.interval == 10.0
    assert args.verbose is False


@pytest.mark.parametrize("interval", ["0", "-5", "soon"])
def test_invalid_interval_exits_with_usage_error(interval: str) -> None:
    with pytest.raises(SystemExit) as exc:
        cli._parse_args(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            ["reconcile", "--namespace", "apps", "--name", "avr", "--interval", interval]
        )

    assert exc.value.code == 2


def test_missing_name_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["reconcile", "--namespace", "apps"])

    assert exc.value.code == 2


def test_main_runs_one_pass(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str]] = []
    sentinel = object()

    def fake_reconcile(
        *, namespace: str, name: str, engine: ReconcileEngine | None = None
    ) -> ReconcileResult:
        assert engine is sentinel
        calls.append((namespace, name))
        return ReconcileResult()

    monkeypatch.setattr(cli, "build_reconcile_engine", lambda: sentinel)
    monkeypatch.setattr(cli, "reconcile_intent", fake_reconcile)
    monkeypatch.setattr(cli, "signal", lambda *_args: None)

    cli.main(["reconcile", "--namespace", "apps", "--name", "avr"])

    assert calls == [("apps", "avr")]


def test_main_exits_2_on_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken() -> object:
        raise MissingConfigurationError("Missing configuration for: DRHUB_API_URL")

    monkeypatch.setattr(cli, "build_reconcile_engine", broken)
    monkeypatch.setattr(cli, "signal", lambda *_args: None)

    with pytest.raises(SystemExit) as exc:
        cli.main(["reconcile", "--namespace", "apps", "--name", "avr"])

    assert exc.value.code == 2


def test_main_exits_1_on_unexpected_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(**_kwargs: object) -> ReconcileResult:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "build_reconcile_engine", object)
    monkeypatch.setattr(cli, "reconcile_intent", explode)
    monkeypatch.setattr(cli, "signal", lambda *_args: None)

    with pytest.raises(SystemExit) as exc:
        cli.main(["reconcile", "--namespace", "apps", "--name", "avr"])

    assert exc.value.code == 1


def test_watch_shortens_delay_after_requeue() -> None:
    outcomes = iter([True, False, True])
    delays: list[float] = []

    cli._watch(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        _args(interval=30.0),
        run_pass=lambda: next(outcomes),
        sleep=delays.append,
        max_passes=3,
    )

    assert delays == [cli.REQUEUE_DELAY_SECONDS, 30.0, cli.REQUEUE_DELAY_SECONDS]


def test_watch_never_waits_longer_than_interval_on_requeue() -> None:
    delays: list[float] = []

    cli._watch(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        _args(interval=1.0),
        run_pass=lambda: True,
        sleep=delays.append,
        max_passes=2,
    )

    assert delays == [1.0, 1.0]
