"""
Transport interface.

The request engine talks to the network only through a ``Transport``: one
``send`` per HTTP exchange, returning status, headers and body text. Anything
that can do that (aiohttp, a test double) can drive the engine.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple


@dataclass
class TransportResponse:
    """Raw HTTP response; header names are lower-cased."""
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ""

    def __post_init__(self):
        self.headers = {str(k).lower(): str(v) for k, v in self.headers.items()}

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name.lower(), default)


class Transport(ABC):
    """Sends one HTTP request and returns the raw response."""

    @abstractmethod
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
        """
        Send a request.

        Raises:
            TransportError: On connection failures and timeouts
            ProtocolMismatchError: If the response body cannot be decoded as text
        """

    async def close(self) -> None:
        """Release pooled connections."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
