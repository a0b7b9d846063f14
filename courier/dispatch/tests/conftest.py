import os
from unittest.mock import AsyncMock, patch

import httpx
import pytest

# The config singleton is created on import; pin a live environment for tests.
os.environ["APP_ENV"] = "development"
os.environ.pop("APP_ORIGIN", None)

from courier.dispatch.core.request_builder import ExecutionContext  # noqa: E402
from courier.dispatch.models.environment import AppEnv  # noqa: E402
from courier.dispatch.services.gate import DispatchGate  # noqa: E402

ORIGIN = "https://app.test"


def make_live_gate(client: httpx.AsyncClient) -> DispatchGate:
    return DispatchGate(client, AppEnv.DEVELOPMENT, ExecutionContext(origin=ORIGIN))


@pytest.fixture
def demo_sleep():
    """Replace the demo delay so tests do not wait on real timers."""
    with patch("courier.dispatch.services.gate.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


@pytest.fixture
def demo_client():
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture
def demo_gate(demo_client):
    return DispatchGate(demo_client, AppEnv.PREVIEW, ExecutionContext(origin=ORIGIN))


@pytest.fixture
def make_gate():
    """Factory binding a live DispatchGate to a caller-managed client."""
    return make_live_gate
