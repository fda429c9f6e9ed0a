"""
Redis Stream Configuration

Stream names, consumer groups, and setup utilities.
"""

import logging
from dataclasses import dataclass

import redis

logger = logging.getLogger(__name__)

# Stream names
REQUEST_STREAM = "msg:sms:requests"

# Consumer group of the downstream worker that sends deferred traffic
SMS_WORKER_GROUP = "sms-dispatch-worker"


@dataclass
class StreamConfig:
    """Configuration for a stream and its consumer group."""

    stream_name: str
    group_name: str
    max_len: int = 100000
    start_id: str = "0"  # "0" = all history, "$" = new only


def ensure_stream_group(
    client: redis.Redis,
    stream_name: str,
    group_name: str,
    start_id: str = "0",
) -> bool:
    """
    Ensure a consumer group exists for a stream.

    Creates the stream and group if they don't exist. Safe to call multiple times.

    Returns:
        True if group was created, False if it already existed
    """
    try:
        client.xgroup_create(stream_name, group_name, id=start_id, mkstream=True)
        logger.info(f"Created consumer group '{group_name}' for stream '{stream_name}'")
        return True
    except redis.ResponseError as e:
        if "BUSYGROUP" in str(e):
            logger.debug(f"Consumer group '{group_name}' already exists for '{stream_name}'")
            return False
        raise


def ensure_sms_streams(client: redis.Redis, stream_name: str = REQUEST_STREAM) -> list[StreamConfig]:
    """
    Ensure the SMS hand-off stream and its consumer group exist.

    Should be called on startup by services that publish deferred traffic.
    """
    configs = [StreamConfig(stream_name, SMS_WORKER_GROUP)]
    for config in configs:
        ensure_stream_group(client, config.stream_name, config.group_name, config.start_id)
    return configs

