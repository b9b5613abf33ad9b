"""
Request execution engine.

The single component every resource service delegates to: it builds request
descriptors, sends them over a transport, retries rate-limited calls, turns
non-2xx responses into typed errors, unwraps the response envelope and follows
``Link`` pagination.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

from pydantic import BaseModel

from ..config import ClientConfig
from ..recovery.retry import ExponentialBackoff, RetryPolicy, parse_retry_after
from ..runtime import codec
from ..runtime.errors import (
    RateLimitedError,
    TransportError,
    error_from_response,
)
from ..transport.base import Transport, TransportResponse
from .pagination import CallLimit, ListPage, PagedSequence, cursors_from_link
from .requests import HttpMethod, QueryInput, RequestBuilder, RequestDescriptor

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429


def retry_policy_from_config(config: ClientConfig) -> RetryPolicy:
    """Exponential backoff bounded by the configured retry budget."""
    return ExponentialBackoff(
        max_attempts=config.max_retries + 1,
        base_delay=config.retry_delay,
        max_delay=config.max_retry_delay,
        factor=config.retry_backoff,
    )


class RequestEngine:
    """
    Builds, sends and decodes Admin API requests.

    Implements the ``RequestExecutor`` capability that resource services hold.

    Example:
        ```python
        engine = RequestEngine(config, AiohttpTransport())
        request = engine.build("themes.json", "GET", "themes")
        async for theme in engine.execute_list(request, Theme):
            ...
        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the engine.

        Args:
            config: Client configuration
            transport: Transport used for every request
            retry_policy: Policy for 429 responses and GET transport failures;
                derived from ``config`` when omitted
            sleep: Coroutine used to wait between attempts
        """
        self.config = config
        self.transport = transport
        self.builder = RequestBuilder(config)
        self.retry_policy = retry_policy or retry_policy_from_config(config)
        self._sleep = sleep

    # =========================================================================
    # Building
    # =========================================================================

    def build(
        self,
        path: str,
        method: Union[str, HttpMethod] = HttpMethod.GET,
        envelope_key: Optional[str] = None,
        query: Optional[QueryInput] = None,
        body: Optional[Union[BaseModel, Mapping[str, Any]]] = None,
    ) -> RequestDescriptor:
        """Build a request descriptor; see ``RequestBuilder.build``."""
        return self.builder.build(path, method, envelope_key, query, body)

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(self, descriptor: RequestDescriptor, target: Any = None) -> Any:
        """
        Execute a single-resource request.

        Args:
            descriptor: Request to send
            target: Type to decode the envelope into; None discards the body

        Returns:
            Decoded value, or None

        Raises:
            RequestFailedError: On non-2xx responses
            RateLimitedError: When 429 responses outlast the retry budget
            ProtocolMismatchError: When the response breaks the envelope contract
            TransportError: On network failures
        """
        response = await self._send(descriptor)
        return codec.decode(response.text, descriptor.envelope_key, target)

    async def execute_page(self, descriptor: RequestDescriptor, item_type: Any) -> ListPage:
        """
        Execute a list request and return a single page with its cursors.

        Args:
            descriptor: Request to send
            item_type: Type of each item in the envelope's array

        Returns:
            Decoded page
        """
        response = await self._send(descriptor)
        items = codec.decode(response.text, descriptor.envelope_key, List[item_type])
        next_cursor, previous_cursor = cursors_from_link(response.header("link"))
        return ListPage(
            items=items,
            next_cursor=next_cursor,
            previous_cursor=previous_cursor,
            call_limit=CallLimit.parse(response.header("x-shopify-shop-api-call-limit")),
        )

    def execute_list(self, descriptor: RequestDescriptor, item_type: Any) -> PagedSequence:
        """
        Lazy sequence over every page of a list request.

        Nothing is sent until the sequence is iterated.
        """
        return PagedSequence(self, descriptor, item_type)

    # =========================================================================
    # Sending
    # =========================================================================

    async def _send(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Send with bounded retries and raise for non-2xx responses."""
        method = descriptor.method.value
        try:
            response = await self._send_with_retry(descriptor)
        except asyncio.CancelledError:
            # Re-raised unchanged; asyncio.timeout() matches the exact type
            logger.debug(f"{method} {descriptor.full_url} cancelled")
            raise

        if not response.ok:
            error = error_from_response(response.status, response.text, response.headers)
            logger.debug(f"{method} {descriptor.full_url} failed: {error.message}")
            raise error

        return response

    async def _send_with_retry(self, descriptor: RequestDescriptor) -> TransportResponse:
        method = descriptor.method.value
        policy = self.retry_policy
        attempt = 0

        while True:
            attempt += 1
            logger.debug(f"{method} {descriptor.full_url} (attempt {attempt})")

            try:
                response = await self.transport.send(
                    method,
                    descriptor.url,
                    headers=descriptor.headers,
                    params=descriptor.query,
                    body=descriptor.body,
                    timeout=self.config.timeout,
                )
            except TransportError as e:
                # Only idempotent reads are resent after a network failure
                if descriptor.method is HttpMethod.GET and policy.can_retry(attempt):
                    delay = policy.delay_for(attempt)
                    logger.warning(
                        f"{method} {descriptor.path} failed: {e.message}. "
                        f"Retrying in {delay:.2f}s (attempt {attempt}/{policy.max_attempts})"
                    )
                    await self._sleep(delay)
                    continue
                if attempt > 1:
                    logger.error(f"{method} {descriptor.path} failed after {attempt} attempts: {e.message}")
                raise

            call_limit = response.header("x-shopify-shop-api-call-limit")
            logger.debug(f"{method} {descriptor.path} -> {response.status} (call limit {call_limit})")

            if response.status != RATE_LIMIT_STATUS:
                return response

            retry_after = parse_retry_after(response.header("retry-after"))
            if policy.can_retry(attempt):
                delay = policy.delay_for(attempt, retry_after)
                logger.warning(
                    f"{method} {descriptor.path} rate limited. "
                    f"Retrying in {delay:.2f}s (attempt {attempt}/{policy.max_attempts})"
                )
                await self._sleep(delay)
                continue

            logger.error(f"{method} {descriptor.path} still rate limited after {attempt} attempts")
            parsed = error_from_response(response.status, response.text, response.headers)
            raise RateLimitedError(
                response.status,
                parsed.message if parsed.messages else None,
                attempts=attempt,
                retry_after=retry_after,
                messages=parsed.messages,
                raw_body=response.text,
                request_id=parsed.request_id,
            )
