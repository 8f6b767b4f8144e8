from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class VolumeRecord:
    """A persisted volume definition retrieved from the backup store.

    ``payload`` is the object exactly as it was backed up; the engine only wraps it.
    """

    name: str
    payload: Mapping[str, object] = field(default_factory=dict[str, object], hash=False)
