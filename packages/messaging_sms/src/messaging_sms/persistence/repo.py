"""
SMS Repository

Repository pattern for SMS engine database operations.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from messaging_sms.contracts.outcome import Outcome
from messaging_sms.contracts.payloads import RequestStatus, SMSRequest
from messaging_sms.persistence.models import RESPONSE_CODE_MAX_LEN, MsgRequest, MsgTemplate


class SMSRepository:
    """Repository for SMS engine database operations."""

    def __init__(self, db: Session):
        self.db = db

    # =========================================================================
    # Templates
    # =========================================================================

    def get_template(self, template_id: str) -> MsgTemplate | None:
        """Get a template by its DLT template id, active or not."""
        return self.db.query(MsgTemplate).filter(MsgTemplate.template_id == template_id).first()

    def create_template(
        self,
        template_id: str,
        application_id: str,
        gateway: str,
        sender_id: str = "",
        entity_id: str = "",
        message_type: str = "",
        template_name: str = "",
        template_format: str = "",
        is_active: bool = True,
    ) -> MsgTemplate:
        """Register a template."""
        template = MsgTemplate(
            template_id=template_id,
            application_id=application_id,
            gateway=gateway,
            sender_id=sender_id,
            entity_id=entity_id,
            message_type=message_type,
            template_name=template_name,
            template_format=template_format,
            is_active=is_active,
        )
        self.db.add(template)
        self.db.flush()
        return template

    # =========================================================================
    # Requests
    # =========================================================================

    def create_request(self, request: SMSRequest) -> MsgRequest:
        """
        Store a pending request.

        Flushes so request_id and communication_id are populated before the
        caller's transaction commits.
        """
        row = MsgRequest(
            application_id=request.application_id,
            facility_id=request.facility_id,
            priority=int(request.priority),
            message_text=request.message_text,
            message_type=request.message_type.value,
            sender_id=request.sender_id,
            mobile_number=request.mobile_numbers_csv,
            entity_id=request.entity_id,
            template_id=request.template_id,
            gateway=request.gateway.value if request.gateway else "",
            status=RequestStatus.PENDING.value,
        )
        if request.communication_id:
            row.communication_id = request.communication_id

        self.db.add(row)
        self.db.flush()
        return row

    def get_request_by_communication_id(self, communication_id: str) -> MsgRequest | None:
        return (
            self.db.query(MsgRequest)
            .filter(MsgRequest.communication_id == communication_id)
            .first()
        )

    def update_outcome(self, communication_id: str, outcome: Outcome) -> MsgRequest | None:
        """
        Write a vendor outcome onto the stored request.

        A pending request takes the outcome's status. Once the request is
        submitted or failed, only an outcome of the same classification may
        replace the outcome columns; any other outcome leaves the row untouched,
        so the stored status and outcome never disagree.

        Returns:
            The request (check its status to see whether the outcome was
            applied), None if no request has this communication_id
        """
        row = self.get_request_by_communication_id(communication_id)
        if row is None:
            return None

        new_status = outcome.request_status.value
        if row.status not in (RequestStatus.PENDING.value, new_status):
            return row

        row.status = new_status
        row.response_code = outcome.response_code[:RESPONSE_CODE_MAX_LEN]
        row.response_message = outcome.response_text
        row.reference_id = outcome.reference_id
        row.complete_response = outcome.complete_response
        row.updated_date = datetime.utcnow()

        self.db.flush()
        return row
