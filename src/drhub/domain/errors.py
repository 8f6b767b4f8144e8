"""Error taxonomy for reconciliation.

Every error below is scoped to one subscription (or one pass) and is safe to
retry; none of them is fatal to the controller process.
"""

from __future__ import annotations


class ReconcileError(RuntimeError):
    """Base class for failures surfaced by the reconciliation engine."""


class NotFoundError(ReconcileError):
    """The addressed object does not exist (yet)."""


class PlacementMismatchError(ReconcileError):
    """Placement resolved to a cluster set that is not the fixed DR pair."""


class NoFailoverTargetError(ReconcileError):
    """A paused subscription has no operator-declared failover cluster."""


class RemoteIOError(ReconcileError):
    """The hub store or backup store could not be reached or rejected a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SerializationError(ReconcileError):
    """A manifest payload could not be serialized."""


class InvariantViolationError(ReconcileError):
    """Observed state contradicts an assumption the engine relies on."""
