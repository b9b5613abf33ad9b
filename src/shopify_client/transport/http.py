"""
aiohttp transport.

Keeps one ``aiohttp.ClientSession`` per transport, created on first use and
reused for every request so connections are pooled, and maps aiohttp failures
onto the client's transport errors.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import aiohttp

from ..runtime.errors import (
    ConnectionFailedError, ProtocolMismatchError, RequestTimeoutError, TransportError,
)
from .base import Transport, TransportResponse


logger = logging.getLogger(__name__)


@dataclass
class PoolConfig:
    """Configuration for the HTTP connection pool."""
    max_connections: int = 100
    max_connections_per_host: int = 30
    connection_timeout: float = 10.0
    request_timeout: float = 30.0
    keep_alive_timeout: float = 30.0
    enable_compression: bool = True


class AiohttpTransport(Transport):
    """
    Transport backed by a pooled ``aiohttp.ClientSession``.

    Retries are not performed here; the request engine decides what to retry.
    """

    def __init__(self, config: Optional[PoolConfig] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize the transport.

        Args:
            config: Pool configuration
            session: Existing session to use instead of creating one; it is
                not closed by ``close()``
        """
        self.config = config or PoolConfig()
        self._session = session
        self._owns_session = session is None
        self.closed = False

    async def _get_session(self) -> aiohttp.ClientSession:
        if self.closed:
            raise TransportError("Transport has been closed")

        if self._session is None:
            connector = aiohttp.TCPConnector(
                limit=self.config.max_connections,
                limit_per_host=self.config.max_connections_per_host,
                ttl_dns_cache=300,
                use_dns_cache=True,
                enable_cleanup_closed=True,
                keepalive_timeout=self.config.keep_alive_timeout
            )

            timeout = aiohttp.ClientTimeout(
                total=self.config.request_timeout,
                connect=self.config.connection_timeout
            )

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                auto_decompress=self.config.enable_compression,
                trust_env=True
            )
            logger.debug("Created new aiohttp session")

        return self._session

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        params: Sequence[Tuple[str, str]] = (),
        body: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        session = await self._get_session()

        kwargs = {"headers": dict(headers)}
        if params:
            kwargs["params"] = list(params)
        if body is not None:
            kwargs["data"] = body.encode("utf-8")
        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        try:
            response = await session.request(method, url, **kwargs)
            try:
                text = await response.text()
            except UnicodeDecodeError as e:
                raise ProtocolMismatchError(
                    f"{method} {url} returned a body that is not valid text",
                    details={"status": response.status, "position": e.start},
                    cause=e,
                )
            finally:
                response.release()
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(f"{method} {url} timed out", cause=e)
        except aiohttp.ClientConnectionError as e:
            raise ConnectionFailedError(f"{method} {url} failed to connect: {e}", cause=e)
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {url} failed: {e}", cause=e)

        return TransportResponse(status=response.status, headers=dict(response.headers), text=text)

    async def close(self):
        """Close the session if this transport created it."""
        if self.closed:
            return
        self.closed = True
        if self._session is not None and self._owns_session:
            await self._session.close()
            logger.debug("Closed aiohttp session")
        self._session = None
