"""
Gateway Selector

Resolves which vendor gateway carries a message, from the template registry.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from messaging_sms.contracts.payloads import Gateway, MessageType
from messaging_sms.errors import GatewayResolutionError
from messaging_sms.persistence.repo import SMSRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayRoute:
    """Gateway metadata a template resolves to."""

    gateway: Gateway
    entity_id: str
    sender_id: str
    message_type: MessageType | None  # None when the template does not fix one


class GatewaySelector:
    """
    Resolves gateway routes from msg_template rows.

    Only active templates resolve.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = SMSRepository(db)

    def resolve(self, template_id: str, application_id: str | None = None) -> GatewayRoute:
        """
        Resolve the gateway route for a template.

        Args:
            template_id: DLT template id
            application_id: When given, must be one of the template's applications

        Returns:
            Gateway route for the template

        Raises:
            GatewayResolutionError: Unknown or inactive template, or the
                application is not mapped to it
            UnsupportedGatewayError: Template names a gateway outside the known set
        """
        template = self.repo.get_template(template_id)

        if template is None or not template.is_active:
            logger.warning(f"No active template found for template_id: {template_id}")
            raise GatewayResolutionError(
                f"Template not found: {template_id}",
                code="TEMPLATE_NOT_FOUND",
                details={"template_id": template_id},
            )

        if application_id is not None and application_id not in template.application_ids:
            logger.warning(
                "Template not mapped to application",
                extra={"template_id": template_id, "application_id": application_id},
            )
            raise GatewayResolutionError(
                f"Template {template_id} is not mapped to application {application_id}",
                code="TEMPLATE_NOT_MAPPED",
                details={"template_id": template_id, "application_id": application_id},
            )

        route = GatewayRoute(
            gateway=Gateway.parse(template.gateway),
            entity_id=template.entity_id or "",
            sender_id=template.sender_id or "",
            message_type=_template_message_type(template.message_type),
        )

        logger.debug(
            "Resolved gateway for template",
            extra={"template_id": template_id, "gateway": route.gateway.value},
        )
        return route


def _template_message_type(value: str | None) -> MessageType | None:
    if not value:
        return None
    try:
        return MessageType(value.strip().upper())
    except ValueError:
        return None
