"""
SMS Stream Producer

Hands deferred (promotional and bulk) requests off to a Redis Stream.
"""

import logging

import redis

from messaging_sms.contracts.envelope import SMSEnvelope
from messaging_sms.contracts.event_types import SMSEventType
from messaging_sms.contracts.payloads import SMSRequest
from messaging_sms.errors import AsyncHandoffError
from messaging_sms.streams.groups import REQUEST_STREAM

logger = logging.getLogger(__name__)


class SMSStreamProducer:
    """
    Producer for publishing SMS requests to Redis Streams.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        stream_name: str = REQUEST_STREAM,
        max_len: int = 100000,
    ):
        self.redis = redis_client
        self.stream_name = stream_name
        self.max_len = max_len

    def publish_request(
        self,
        request: SMSRequest,
        correlation_id: str | None = None,
    ) -> str:
        """
        Publish a request, unmodified, for asynchronous sending.

        Returns:
            Stream message ID

        Raises:
            AsyncHandoffError: Redis rejected the publish or is unreachable
        """
        envelope = SMSEnvelope.create(
            event_type=SMSEventType.REQUEST_QUEUED.value,
            application_id=request.application_id,
            payload=request.to_stream_payload(),
            correlation_id=correlation_id,
            metadata={"priority": int(request.priority)},
        )

        try:
            return self._publish(self.stream_name, envelope)
        except redis.RedisError as e:
            logger.error(
                f"Failed to publish SMS request to {self.stream_name}: {e}",
                extra={"application_id": request.application_id, "template_id": request.template_id},
            )
            raise AsyncHandoffError(
                f"Failed to publish SMS request: {e}",
                code="STREAM_PUBLISH_FAILED",
                retryable=True,
            ) from e

    def _publish(self, stream_name: str, envelope: SMSEnvelope) -> str:
        """
        Publish an envelope to a stream.

        Returns:
            Stream message ID
        """
        data = envelope.to_stream_data()

        msg_id = self.redis.xadd(
            stream_name,
            data,
            maxlen=self.max_len,
            approximate=True,
        )

        logger.debug(
            f"Published to {stream_name}",
            extra={
                "stream": stream_name,
                "event_type": envelope.event_type,
                "event_id": str(envelope.event_id),
                "msg_id": msg_id,
            },
        )

        return msg_id
