"""Shared pytest configuration: suite markers and a clean settings environment."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from binary_normalizer.schemas import ENV_PREFIX

SUITE_MARKERS = {
    "e2e_tests": "e2e",
    "integration_tests": "integration",
    "unit_tests": "unit",
}


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test with the suite its directory belongs to."""
    del config
    for item in items:
        parts = Path(str(item.path)).parts
        for directory, marker in SUITE_MARKERS.items():
            if directory in parts:
                item.add_marker(getattr(pytest.mark, marker))
                break


@pytest.fixture(autouse=True)
def _isolate_normalizer_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop ``BINARY_NORMALIZER_*`` variables inherited from the shell."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
