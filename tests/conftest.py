from __future__ import annotations

from collections.abc import Iterator

import pytest

from hazardwalk.events import reset_event_bus_for_testing


@pytest.fixture(autouse=True)
def clear_event_bus() -> Iterator[None]:
    """Give every test a fresh global event bus."""
    reset_event_bus_for_testing()
    yield
    reset_event_bus_for_testing()
