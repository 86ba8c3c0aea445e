from __future__ import annotations

import pytest

from slicebox.config import Settings
from slicebox.demo import build_store
from slicebox.store import Store


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(fetch_delay_seconds=0, log_actions=False)


@pytest.fixture
def demo_store(fast_settings: Settings) -> Store:
    return build_store(fast_settings)
