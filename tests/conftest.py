"""Shared pytest fixtures and test helpers for propcheck tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

import pytest

from propcheck.config import get_settings

LABEL = "<displayName>"


def run_prop_types(prop_types: Mapping[str, Callable[..., None]], props: Mapping[str, Any]) -> None:
    """Call every validator the way a host framework does."""
    for prop, validator in prop_types.items():
        validator(props, prop, LABEL)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PROPCHECK_* variables from the environment out of every test."""
    for name in ("STRICT", "MESSAGE_PREFIX", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(f"PROPCHECK_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
