"""
Dispatch gate.

Single entry point for outbound calls: fulfills from a caller-supplied mock
in demo environments, otherwise builds the request, performs exactly one
transport call and decodes the response.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

import httpx

from courier.common.core.request_context import bind_request_id, reset_request_id

from ..core.exceptions import ConfigurationError
from ..core.request_builder import ExecutionContext, build_url, prepare_request
from ..core.response_decoder import decode_response
from ..models.environment import AppEnv
from ..models.request import RequestOptions

if TYPE_CHECKING:
    from ..config import DispatchConfig

logger = logging.getLogger("courier.gate")

DEMO_DELAY_SECONDS = 0.5


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class DispatchGate:
    """
    Environment-aware request dispatcher.

    The environment is fixed at construction; every dispatch() call is
    independent and holds no shared state.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        environment: AppEnv = AppEnv.DEVELOPMENT,
        context: Optional[ExecutionContext] = None,
    ):
        self.client = client
        self.environment = AppEnv(environment)
        self.context = context or ExecutionContext()

    @classmethod
    def from_config(cls, config: "DispatchConfig", client: httpx.AsyncClient) -> "DispatchGate":
        return cls(
            client,
            environment=config.APP_ENV,
            context=ExecutionContext(origin=config.APP_ORIGIN),
        )

    @property
    def is_demo(self) -> bool:
        return self.environment.is_demo

    async def dispatch(
        self,
        route: str,
        options: Optional[RequestOptions] = None,
        mock: Any = MISSING,
    ) -> Any:
        """
        Perform a request, or resolve with the mock in demo environments.

        Args:
            route: Absolute URL or path resolved against the execution origin.
            options: Method, headers, query and body for the request.
            mock: Payload returned in demo mode. Any value, falsy ones included,
                counts as provided; only MISSING means absent.

        Returns:
            Parsed JSON, raw text, NO_CONTENT for 204 responses, or the mock.

        Raises:
            ConfigurationError: demo mode without a mock, or an unresolvable route.
            RequestFailure: non-2xx response.
        """
        request_id, token = bind_request_id()
        try:
            if self.is_demo:
                return await self._resolve_mock(route, mock, request_id)
            return await self._request(route, options, request_id)
        finally:
            reset_request_id(token)

    async def _resolve_mock(self, route: str, mock: Any, request_id: str) -> Any:
        if mock is MISSING:
            raise ConfigurationError(
                f"Mock response required when APP_ENV is '{self.environment.value}'"
            )
        logger.debug(
            "Resolving %s from mock",
            route,
            extra={"mode": "demo", "request_id": request_id},
        )
        await asyncio.sleep(DEMO_DELAY_SECONDS)
        return mock

    async def _request(
        self, route: str, options: Optional[RequestOptions], request_id: str
    ) -> Any:
        url = build_url(route, (options.query if options else None), self.context)
        descriptor = prepare_request(options)

        logger.debug(
            "Dispatching %s %s",
            descriptor.method,
            url,
            extra={"mode": "live", "request_id": request_id},
        )
        response = await self.client.request(
            descriptor.method, str(url), **descriptor.to_httpx_kwargs()
        )
        logger.debug(
            "Received %s for %s %s",
            response.status_code,
            descriptor.method,
            url,
            extra={
                "mode": "live",
                "request_id": request_id,
                "status_code": response.status_code,
            },
        )
        return decode_response(response)
