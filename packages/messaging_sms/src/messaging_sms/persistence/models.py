"""
SMS Engine Database Models

Tables:
- msg_template: DLT-registered templates and the gateway each one is sent through
- msg_request: one row per send attempt, later reconciled with the vendor outcome
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, SmallInteger, String, Text
from sqlalchemy.orm import declarative_base

from messaging_sms.contracts.payloads import MessageType, RequestStatus

SMSBase = declarative_base()

# Vendor response codes are free-form; longer codes are truncated on write
RESPONSE_CODE_MAX_LEN = 50


class MsgTemplate(SMSBase):
    """
    DLT template registered for one or more applications.

    application_id holds a comma-delimited list of application ids allowed
    to send with this template.
    """

    __tablename__ = "msg_template"

    template_local_id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(String(500), nullable=False, default="")
    template_name = Column(String(255), nullable=False, default="")
    template_format = Column(Text, nullable=False, default="")
    sender_id = Column(String(20), nullable=False, default="")
    entity_id = Column(String(50), nullable=False, default="")
    template_id = Column(String(50), nullable=False, unique=True)
    gateway = Column(String(10), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    message_type = Column(String(2), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)

    @property
    def application_ids(self) -> list[str]:
        return [app_id.strip() for app_id in (self.application_id or "").split(",") if app_id.strip()]

    def __repr__(self) -> str:
        return f"<MsgTemplate {self.template_id} gateway={self.gateway}>"


class MsgRequest(SMSBase):
    """
    One message send attempt.

    Created pending before the vendor call; the outcome columns are filled
    in by reconciliation, keyed by communication_id.
    """

    __tablename__ = "msg_request"

    request_id = Column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    communication_id = Column(
        String(64), nullable=False, unique=True, index=True, default=lambda: uuid4().hex
    )
    application_id = Column(String(50), nullable=False)
    facility_id = Column(String(50), nullable=False, default="")
    priority = Column(SmallInteger, nullable=False)
    message_text = Column(Text, nullable=False)
    message_type = Column(String(2), nullable=False, default=MessageType.PLAIN_TEXT.value)
    sender_id = Column(String(20), nullable=False, default="")
    mobile_number = Column(Text, nullable=False, default="")
    entity_id = Column(String(50), nullable=False, default="")
    template_id = Column(String(50), nullable=False)
    gateway = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False, default=RequestStatus.PENDING.value, index=True)

    # Vendor outcome
    reference_id = Column(String(100), nullable=True)
    response_code = Column(String(RESPONSE_CODE_MAX_LEN), nullable=True)
    response_message = Column(Text, nullable=True)
    complete_response = Column(Text, nullable=True)

    created_date = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    updated_date = Column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<MsgRequest {self.communication_id} status={self.status}>"
