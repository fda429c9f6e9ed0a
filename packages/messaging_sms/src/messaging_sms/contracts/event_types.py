"""
SMS Event Types

Events published by the SMS Messaging Engine.
"""

from enum import Enum


class SMSEventType(str, Enum):
    """
    Event types for the SMS Messaging Engine.

    PUBLISHED by this engine:
    - REQUEST_QUEUED: Promotional/bulk request handed off for asynchronous sending
    """

    REQUEST_QUEUED = "sms_request_queued"

    def __str__(self) -> str:
        return self.value
