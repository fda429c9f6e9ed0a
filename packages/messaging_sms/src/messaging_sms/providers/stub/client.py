"""
Stub SMS Provider

Development provider that logs all operations without making real API calls.
Useful for local development and testing.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from messaging_sms.contracts.payloads import Gateway
from messaging_sms.providers.base import SMSParams, SMSProvider

logger = logging.getLogger(__name__)

# Canned bodies in each gateway's success format
DEFAULT_RESPONSES = {
    Gateway.CDAC: "402,MsgID = 100000000000000000001stubsms",
    Gateway.NIC: "Message Accepted for Request ID=100000000001~code=API000 & Info=Platform Accepted",
}


class StubSMSProvider(SMSProvider):
    """
    Stub provider for development and testing.

    - Logs all outbound messages
    - Answers with a canned body in the target gateway's format
    - Can be configured to raise instead, to simulate gateway failures
    """

    def __init__(
        self,
        gateway: Gateway,
        response_text: str | None = None,
        error: Exception | None = None,
    ):
        super().__init__(url=f"stub://{gateway.name.lower()}")
        self.gateway = gateway
        self.response_text = response_text if response_text is not None else DEFAULT_RESPONSES[gateway]
        self.error = error
        self.sent_messages: list[dict[str, Any]] = []

    async def _send(self, params: SMSParams) -> str:
        self.sent_messages.append(
            {
                "gateway": self.gateway.value,
                "sender_id": params.sender_id,
                "mobile_number": params.mobile_number,
                "message": params.message,
                "template_id": params.template_id,
                "message_type": params.message_type.value,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

        logger.info(
            f"[STUB] Sending SMS via {self.gateway.name}",
            extra={
                "to": params.mobile_number,
                "text": params.message[:100] + "..." if len(params.message) > 100 else params.message,
            },
        )

        if self.error is not None:
            raise self.error

        return self.response_text
