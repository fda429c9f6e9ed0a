"""
SMS Contracts

Request/outcome models and the stream envelope.
"""

from messaging_sms.contracts.envelope import SMSEnvelope
from messaging_sms.contracts.event_types import SMSEventType
from messaging_sms.contracts.outcome import Outcome, OutcomeStatus
from messaging_sms.contracts.payloads import (
    DeliveryReport,
    Gateway,
    MessageType,
    Priority,
    RequestStatus,
    SMSRequest,
)

__all__ = [
    "SMSEnvelope",
    "SMSEventType",
    "Outcome",
    "OutcomeStatus",
    "DeliveryReport",
    "Gateway",
    "MessageType",
    "Priority",
    "RequestStatus",
    "SMSRequest",
]
