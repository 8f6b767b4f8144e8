"""Shared reconciliation contract components.

This module intentionally holds only:
- the per-subscription outcome variants folded by the engine
- the classification variant produced by the subscription classifier
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from drhub.domain.model import PlacementDecision


class OutcomeKind(StrEnum):
    SKIP = "skip"
    REQUEUE = "requeue"
    DECISION = "decision"


@dataclass(frozen=True, slots=True, kw_only=True)
class SkipOutcome:
    """Nothing to do for the subscription in this pass."""

    reason: str | None = None
    kind: Literal[OutcomeKind.SKIP] = OutcomeKind.SKIP


@dataclass(frozen=True, slots=True, kw_only=True)
class RequeueOutcome:
    """The subscription needs another pass; no decision is recorded."""

    reason: str | None = None
    kind: Literal[OutcomeKind.REQUEUE] = OutcomeKind.REQUEUE


@dataclass(frozen=True, slots=True, kw_only=True)
class DecisionOutcome:
    """Primary-role work is in place on ``decision.home_cluster``."""

    decision: PlacementDecision
    kind: Literal[OutcomeKind.DECISION] = OutcomeKind.DECISION


type SubscriptionOutcome = SkipOutcome | RequeueOutcome | DecisionOutcome
type OutcomesBySubscription = dict[str, SubscriptionOutcome]


class SubscriptionPath(StrEnum):
    """Classifier verdicts, listed in priority order."""

    SKIP = "skip"
    PAUSED_FOR_DR = "paused_for_dr"
    CONVERGED = "converged"
    NEEDS_CONVERGENCE = "needs_convergence"


@dataclass(frozen=True, slots=True, kw_only=True)
class Classification:
    path: SubscriptionPath
    decision: PlacementDecision | None = None
    reason: str | None = None
