"""
SMS Redis Streams

Asynchronous hand-off of deferred SMS traffic via Redis Streams.
"""

from messaging_sms.streams.groups import (
    REQUEST_STREAM,
    SMS_WORKER_GROUP,
    StreamConfig,
    ensure_sms_streams,
    ensure_stream_group,
)
from messaging_sms.streams.producer import SMSStreamProducer

__all__ = [
    "SMSStreamProducer",
    "ensure_sms_streams",
    "ensure_stream_group",
    "StreamConfig",
    "REQUEST_STREAM",
    "SMS_WORKER_GROUP",
]
