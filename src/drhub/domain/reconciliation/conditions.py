"""Decide whether a work bundle is applied from its reported conditions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from drhub.domain.model import ConditionType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from drhub.domain.model import WorkCondition


def most_recent_conditions(conditions: Iterable[WorkCondition]) -> list[WorkCondition]:
    """Return every condition sharing the latest transition time.

    Several conditions can be written by the same transition, so ties are kept.
    Input order does not matter.
    """

    ordered = sorted(conditions, key=lambda condition: condition.last_transition_time, reverse=True)
    if not ordered:
        return []
    latest = ordered[0].last_transition_time
    recent: list[WorkCondition] = []
    for condition in ordered:
        if condition.last_transition_time != latest:
            break
        recent.append(condition)
    return recent


def is_work_applied(conditions: Iterable[WorkCondition]) -> bool:
    """True when the latest conditions say Applied and do not also say Degraded."""

    applied = False
    degraded = False
    for condition in most_recent_conditions(conditions):
        if not condition.is_true:
            continue
        if condition.type == ConditionType.APPLIED:
            applied = True
        elif condition.type == ConditionType.DEGRADED:
            degraded = True

    # simultaneous Applied and Degraded is not trusted as applied
    return applied and not degraded
