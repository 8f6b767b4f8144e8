from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def isolated_drhub_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep developer ``DRHUB_*`` settings out of tests."""

    for name in list(os.environ):
        if name.startswith("DRHUB_"):
            monkeypatch.delenv(name)
    yield
