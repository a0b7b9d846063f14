"""
Where: courier/dispatch/lifecycle.py
What: Build and tear down the shared HTTP client and DispatchGate.
Why: Keep client construction (SSL, limits, timeout) in one place for all callers.
"""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Optional

from courier.common.core.http_client import HttpClientFactory

from .services.gate import DispatchGate

if TYPE_CHECKING:
    from .config import DispatchConfig

logger = logging.getLogger("courier.lifecycle")


@asynccontextmanager
async def open_gate(
    dispatch_config: Optional["DispatchConfig"] = None,
) -> AsyncIterator[DispatchGate]:
    """Yield a DispatchGate bound to a freshly created httpx.AsyncClient."""
    if dispatch_config is None:
        from .config import config as dispatch_config

    factory = HttpClientFactory(dispatch_config)
    client = factory.create_async_client(timeout=dispatch_config.REQUEST_TIMEOUT)

    logger.info(
        "Dispatch gate ready",
        extra={
            "app_env": dispatch_config.APP_ENV.value,
            "demo": dispatch_config.APP_ENV.is_demo,
        },
    )
    try:
        yield DispatchGate.from_config(dispatch_config, client)
    finally:
        await client.aclose()
