"""
SMS Payload Models

Pydantic models and enums shared by the dispatcher, the vendor adapters and
the Redis Stream hand-off.
"""

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from messaging_sms.errors import UnsupportedGatewayError


class Priority(IntEnum):
    """Request priority. OTP and transactional traffic is sent synchronously."""

    OTP = 1
    TRANSACTIONAL = 2
    PROMOTIONAL = 3
    BULK = 4

    @property
    def is_synchronous(self) -> bool:
        return self in (Priority.OTP, Priority.TRANSACTIONAL)


class MessageType(str, Enum):
    """Message text encoding requested by the caller."""

    PLAIN_TEXT = "PM"
    UNICODE = "UC"


class Gateway(str, Enum):
    """
    Supported SMS vendor gateways.

    Values are the gateway ids stored on msg_template rows.
    """

    CDAC = "1"  # C-DAC MSDG: form POST, SHA-512 request key
    NIC = "2"  # NIC SMS gateway: GET with plain credentials

    @classmethod
    def parse(cls, value: "str | Gateway | None") -> "Gateway":
        """Resolve a stored gateway id, rejecting anything outside the known set."""
        try:
            return cls(str(value.value if isinstance(value, Gateway) else value).strip())
        except ValueError:
            raise UnsupportedGatewayError(str(value)) from None


class RequestStatus(str, Enum):
    """Lifecycle of a stored request. Moves out of PENDING at most once."""

    PENDING = "pending"
    SUBMITTED = "submitted"
    FAILED = "failed"


class SMSRequest(BaseModel):
    """
    One message send attempt.

    Field validation (required fields, number formats) happens upstream;
    this model only normalizes shapes.
    """

    request_id: int | None = Field(None, description="Assigned when the request is stored")
    communication_id: str | None = Field(None, description="Join key for reconciliation")
    application_id: str
    facility_id: str
    priority: Priority
    message_text: str
    message_type: MessageType = MessageType.PLAIN_TEXT
    sender_id: str = ""
    mobile_numbers: list[str] = Field(default_factory=list)
    entity_id: str = ""
    template_id: str
    gateway: Gateway | None = None
    status: RequestStatus = RequestStatus.PENDING

    @field_validator("mobile_numbers", mode="before")
    @classmethod
    def _split_mobile_numbers(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [number.strip() for number in value.split(",") if number.strip()]
        return value

    @field_validator("message_type", mode="before")
    @classmethod
    def _default_message_type(cls, value: Any) -> Any:
        # Anything that is not explicitly unicode is sent as plain text
        if isinstance(value, MessageType):
            return value
        return MessageType.UNICODE if value == MessageType.UNICODE.value else MessageType.PLAIN_TEXT

    @property
    def mobile_numbers_csv(self) -> str:
        """Mobile numbers in the comma-delimited wire form."""
        return ",".join(self.mobile_numbers)

    def to_stream_payload(self) -> dict[str, Any]:
        """
        Request fields as published to the hand-off stream.

        The key set matches the record the downstream consumer already reads:
        request_id travels as reqid (0 for a request that was never stored),
        and communication_id and gateway are left out because the consumer
        assigns and resolves those itself.
        """
        return {
            "reqid": self.request_id or 0,
            "application_id": self.application_id,
            "facility_id": self.facility_id,
            "priority": int(self.priority),
            "message_text": self.message_text,
            "sender_id": self.sender_id,
            "mobile_numbers": self.mobile_numbers_csv,
            "entity_id": self.entity_id,
            "template_id": self.template_id,
            "message_type": self.message_type.value,
        }


class DeliveryReport(BaseModel):
    """One line of a gateway delivery status report."""

    mobile_number: str
    sms_status: str
    timestamp: str
