"""
SMS Provider Base

Abstract interface for SMS gateway providers.
Implementations: CDAC (hash-authenticated), NIC (plain credentials), Stub (development).
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from messaging_sms.contracts.payloads import Gateway, MessageType
from messaging_sms.errors import DispatchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class ProviderError(DispatchError):
    """Error from an SMS gateway call."""


class TransportError(ProviderError):
    """The gateway could not be reached, or did not answer in time."""


class VendorHTTPError(ProviderError):
    """The gateway answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(
            message,
            code=str(status_code),
            details={"status_code": status_code, "body": body[:500]},
            retryable=status_code >= 500,
        )
        self.status_code = status_code
        self.body = body


@dataclass
class SMSParams:
    """
    Everything a gateway needs to submit one message.

    message is already encoded for the target gateway.
    """

    username: str
    password: str
    message: str
    sender_id: str
    mobile_number: str
    template_id: str
    message_type: MessageType = MessageType.PLAIN_TEXT
    entity_id: str = ""
    secure_key: str = ""

    def __repr__(self) -> str:
        # Credentials stay out of logs and tracebacks
        return (
            f"SMSParams(username={self.username!r}, sender_id={self.sender_id!r}, "
            f"mobile_number={self.mobile_number!r}, template_id={self.template_id!r}, "
            f"message_type={self.message_type.value!r})"
        )


class SMSProvider(ABC):
    """
    Abstract interface for SMS gateway providers.

    send() returns the raw response body; classifying it is the job of the
    matching response parser. The whole call, including connection setup, is
    bounded by `timeout` seconds.
    """

    gateway: Gateway

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def send(self, params: SMSParams) -> str:
        """
        Submit one message to the gateway.

        Args:
            params: Credentials, recipients and gateway-encoded message

        Returns:
            Raw response body from the gateway

        Raises:
            TransportError: Network failure or timeout
            VendorHTTPError: Non-success HTTP status
        """
        try:
            return await asyncio.wait_for(self._send(params), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                f"{self.gateway.name} gateway call timed out after {self.timeout}s",
                extra={"gateway": self.gateway.value, "sender_id": params.sender_id},
            )
            raise TransportError(
                f"{self.gateway.name} gateway timed out after {self.timeout}s",
                code="TIMEOUT",
                retryable=True,
            ) from e

    @abstractmethod
    async def _send(self, params: SMSParams) -> str:
        """Perform the gateway call and return the response body."""
        ...

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make a gateway request, mapping httpx failures to provider errors."""
        client = await self._get_client()

        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"{self.gateway.name} gateway request timed out: {e}")
            raise TransportError(
                f"{self.gateway.name} gateway timed out: {e}",
                code="TIMEOUT",
                retryable=True,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"{self.gateway.name} gateway request failed: {e}")
            raise TransportError(
                f"{self.gateway.name} gateway request failed: {e}",
                code="HTTP_ERROR",
                retryable=True,
            ) from e

        if not response.is_success:
            logger.error(
                f"{self.gateway.name} gateway returned non-OK status",
                extra={"gateway": self.gateway.value, "status_code": response.status_code},
            )
            raise VendorHTTPError(
                f"{self.gateway.name} gateway returned non-OK status: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                body=response.text,
            )

        return response
