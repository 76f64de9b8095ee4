"""Shared fixtures: fresh settings and silent logging for every test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from resultant.config import clear_settings_cache
from resultant.observability import configure_logging


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop cached settings and RESULTANT_* env vars around each test."""
    import os
    for key in [k for k in os.environ if k.startswith("RESULTANT_")]:
        monkeypatch.delenv(key)
    clear_settings_cache()
    configure_logging("none")
    yield
    clear_settings_cache()
