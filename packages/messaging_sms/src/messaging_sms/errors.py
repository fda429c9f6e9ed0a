"""
SMS Engine Errors

Errors raised by the dispatch flow. Vendor transport errors live in
messaging_sms.providers.base and derive from DispatchError as well.
"""

from typing import Any


class DispatchError(Exception):
    """Base error for the SMS dispatch engine."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.retryable = retryable


class GatewayResolutionError(DispatchError):
    """No usable gateway mapping for the request. No vendor call is made."""


class UnsupportedGatewayError(GatewayResolutionError):
    """Template points at a gateway id outside the known vendor set."""

    def __init__(self, gateway: str):
        super().__init__(
            f"Unsupported gateway: {gateway!r}",
            code="UNSUPPORTED_GATEWAY",
            details={"gateway": gateway},
        )
        self.gateway = gateway


class MissingCredentialsError(GatewayResolutionError):
    """No gateway credentials configured for the sender id."""

    def __init__(self, gateway: str, sender_id: str):
        super().__init__(
            f"No credentials configured for sender {sender_id!r} on gateway {gateway}",
            code="INVALID_SENDER",
            details={"gateway": gateway, "sender_id": sender_id},
        )


class RequestPersistenceError(DispatchError):
    """Storing the request before dispatch failed."""


class ParseError(DispatchError):
    """
    Vendor text matched no known response grammar.

    Never raised out of the dispatcher: the outcome is recorded with a
    fallback code and the raw text instead.
    """


class ReconciliationError(DispatchError):
    """Writing the outcome back onto the stored request failed."""


class AsyncHandoffError(DispatchError):
    """Publishing the request to the event stream failed."""
