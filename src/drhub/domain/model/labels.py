"""Label keys and values read from (and written to) subscriptions."""

from __future__ import annotations

from typing import Final

DR_STATE_LABEL: Final[str] = "ramendr"
DR_STATE_PROTECTED: Final[str] = "protected"

PAUSE_LABEL: Final[str] = "apps.open-cluster-management.io/paused"
PAUSE_TRUE: Final[str] = "true"
PAUSE_FALSE: Final[str] = "false"
