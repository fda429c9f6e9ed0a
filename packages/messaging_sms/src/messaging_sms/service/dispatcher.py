"""
SMS Dispatcher

Dispatches one SMS request:
1. Promotional/bulk traffic is handed off to the request stream, untouched
2. Otherwise resolves the gateway from the template registry
3. Stores the request as pending (when request storage is enabled)
4. Encodes the text for the gateway and calls the vendor
5. Parses the vendor response into an Outcome
6. Reconciles the outcome onto the stored request
"""

import logging
from dataclasses import dataclass
from enum import Enum
from uuid import uuid4

import httpx
from basecore.db import get_sessionmaker
from basecore.redis import get_redis_client
from basecore.settings import Settings, get_settings
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from messaging_sms.contracts.outcome import Outcome
from messaging_sms.contracts.payloads import Gateway, SMSRequest
from messaging_sms.encoding import encode_message
from messaging_sms.errors import (
    DispatchError,
    GatewayResolutionError,
    ParseError,
    RequestPersistenceError,
)
from messaging_sms.parsing import default_parsers
from messaging_sms.parsing.grammar import ResponseParser
from messaging_sms.persistence.repo import SMSRepository
from messaging_sms.providers.base import ProviderError, SMSParams, SMSProvider
from messaging_sms.providers.credentials import CredentialProvider, GatewayCredentials
from messaging_sms.providers.registry import build_provider_registry
from messaging_sms.routing.gateway_selector import GatewayRoute, GatewaySelector
from messaging_sms.service.reconciler import Reconciler
from messaging_sms.streams.producer import SMSStreamProducer

logger = logging.getLogger(__name__)


class DispatchStatus(str, Enum):
    """What happened to a dispatched request."""

    QUEUED = "queued"  # handed off to the request stream
    SENT = "sent"  # vendor accepted the message
    FAILED = "failed"  # vendor rejected it, or the call failed


@dataclass(frozen=True)
class DispatchOptions:
    """
    Per-call dispatch switches.

    store_requests: persist the request before the vendor call and
    reconcile the outcome onto it afterwards.
    """

    store_requests: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "DispatchOptions":
        return cls(store_requests=settings.SMS_STORE_REQUESTS)


@dataclass
class DispatchResult:
    """
    Result of dispatching one request.

    error holds the provider error behind a transport failure outcome, or a
    ParseError when the vendor response was not recognised. Both are
    informational: the outcome has already been recorded.
    """

    status: DispatchStatus
    request: SMSRequest
    outcome: Outcome | None = None
    stream_message_id: str | None = None
    error: DispatchError | None = None


class SMSDispatcher:
    """
    Dispatch coordinator for outbound SMS.

    Holds no per-request state; one instance serves concurrent dispatches.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        producer: SMSStreamProducer,
        providers: dict[Gateway, SMSProvider],
        credentials: CredentialProvider,
        parsers: dict[Gateway, ResponseParser] | None = None,
        reconciler: Reconciler | None = None,
    ):
        self.session_factory = session_factory
        self.producer = producer
        self.providers = providers
        self.credentials = credentials
        self.parsers = parsers or default_parsers()
        self.reconciler = reconciler or Reconciler(session_factory)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        stub: bool = False,
    ) -> "SMSDispatcher":
        """Build a dispatcher wired to the configured database, Redis and gateways."""
        settings = settings or get_settings()
        return cls(
            session_factory=get_sessionmaker(),
            producer=SMSStreamProducer(
                get_redis_client(),
                stream_name=settings.SMS_REQUEST_STREAM,
                max_len=settings.SMS_STREAM_MAX_LEN,
            ),
            providers=build_provider_registry(settings, transport=transport, stub=stub),
            credentials=CredentialProvider.from_settings(settings),
        )

    async def close(self) -> None:
        """Close provider HTTP clients."""
        for provider in self.providers.values():
            await provider.close()

    async def dispatch(self, request: SMSRequest, options: DispatchOptions) -> DispatchResult:
        """
        Dispatch one request.

        Args:
            request: Validated request with priority set
            options: Dispatch switches for this call

        Returns:
            DispatchResult. Vendor transport failures are returned as a failed
            result carrying a "02" outcome, not raised.

        Raises:
            AsyncHandoffError: Publishing deferred traffic failed
            GatewayResolutionError: No usable gateway/credentials; no vendor call made
            RequestPersistenceError: Storing the request failed; no vendor call made
            ReconciliationError: Recording the outcome failed
        """
        if not request.priority.is_synchronous:
            return self._hand_off(request)

        request, creds, provider = self._prepare(request, options)

        params = SMSParams(
            username=creds.username,
            password=creds.password,
            message=encode_message(request.message_text, request.message_type, request.gateway),
            sender_id=request.sender_id,
            mobile_number=request.mobile_numbers_csv,
            template_id=request.template_id,
            message_type=request.message_type,
            entity_id=request.entity_id,
            secure_key=creds.secure_key,
        )

        error: DispatchError | None = None
        try:
            raw = await provider.send(params)
        except ProviderError as e:
            outcome = Outcome.transport_failure(e, raw_text=getattr(e, "body", ""))
            error = e
        else:
            outcome = self.parsers[request.gateway].parse(raw)
            if not outcome.parsed:
                error = ParseError(
                    f"Unrecognised {request.gateway.name} response",
                    code=outcome.response_code,
                    details={"rule": outcome.rule, "complete_response": raw},
                )

        outcome.communication_id = request.communication_id

        if options.store_requests:
            self.reconciler.reconcile(request.communication_id, outcome)

        logger.info(
            "SMS dispatched",
            extra={
                "communication_id": request.communication_id,
                "gateway": request.gateway.value,
                "outcome": outcome.status.value,
                "response_code": outcome.response_code,
            },
        )

        return DispatchResult(
            status=DispatchStatus.SENT if outcome.is_success else DispatchStatus.FAILED,
            request=request.model_copy(update={"status": outcome.request_status}),
            outcome=outcome,
            error=error,
        )

    def _hand_off(self, request: SMSRequest) -> DispatchResult:
        msg_id = self.producer.publish_request(request, correlation_id=request.communication_id)

        logger.info(
            "SMS request handed off",
            extra={
                "application_id": request.application_id,
                "priority": int(request.priority),
                "msg_id": msg_id,
            },
        )
        return DispatchResult(status=DispatchStatus.QUEUED, request=request, stream_message_id=msg_id)

    def _prepare(
        self, request: SMSRequest, options: DispatchOptions
    ) -> tuple[SMSRequest, GatewayCredentials, SMSProvider]:
        """
        Resolve the gateway, apply template defaults and store the request.

        Everything runs in one transaction that commits before the vendor call.
        A database failure is reported as TEMPLATE_LOOKUP_FAILED until the
        request row is being written, and as STORE_FAILED from then on.
        """
        stored = False
        try:
            with self.session_factory.begin() as db:
                route = GatewaySelector(db).resolve(request.template_id, request.application_id)
                request = _apply_route(request, route)
                provider = self._provider_for(request.gateway)
                creds = self.credentials.for_request(request.gateway, request.sender_id)

                if options.store_requests:
                    stored = True
                    row = SMSRepository(db).create_request(request)
                    request = request.model_copy(
                        update={"request_id": row.request_id, "communication_id": row.communication_id}
                    )
                elif not request.communication_id:
                    request = request.model_copy(update={"communication_id": uuid4().hex})
        except SQLAlchemyError as e:
            if stored:
                message, code = "Failed to store SMS request", "STORE_FAILED"
            else:
                message, code = "Failed to look up SMS template", "TEMPLATE_LOOKUP_FAILED"
            logger.error(
                f"{message}: {e}",
                extra={"template_id": request.template_id, "application_id": request.application_id},
            )
            raise RequestPersistenceError(
                f"{message}: {e}",
                code=code,
                details={"template_id": request.template_id},
                retryable=True,
            ) from e

        return request, creds, provider

    def _provider_for(self, gateway: Gateway) -> SMSProvider:
        provider = self.providers.get(gateway)
        if provider is None:
            raise GatewayResolutionError(
                f"No provider configured for gateway {gateway.name}",
                code="PROVIDER_NOT_CONFIGURED",
            )
        return provider


def _apply_route(request: SMSRequest, route: GatewayRoute) -> SMSRequest:
    """Fill in gateway metadata from the template."""
    update = {"gateway": route.gateway}
    if route.message_type is not None:
        update["message_type"] = route.message_type
    if not request.sender_id and route.sender_id:
        update["sender_id"] = route.sender_id
    if not request.entity_id and route.entity_id:
        update["entity_id"] = route.entity_id
    return request.model_copy(update=update)
