"""
NIC SMS Provider

Provider for the NIC SMS gateway (smsgw.sms.gov.in).
Credentials travel as plain query parameters on a GET request; there is
no request signing.

Sample responses:
    Message Accepted for Request ID=123456789~code=API000 & Info=Platform Accepted
"""

import logging

import httpx

from messaging_sms.contracts.payloads import Gateway
from messaging_sms.providers.base import DEFAULT_TIMEOUT_SECONDS, SMSParams, SMSProvider

logger = logging.getLogger(__name__)


class NICSMSProvider(SMSProvider):
    """
    NIC gateway provider.

    entity_id is the organisation's DLT entity id. When configured it is sent
    on every request in place of the per-request value.
    """

    gateway = Gateway.NIC

    def __init__(
        self,
        url: str,
        entity_id: str = "",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(url, timeout=timeout, transport=transport)
        self.entity_id = entity_id

    def build_query(self, params: SMSParams) -> dict[str, str]:
        """Build the query string parameters for a send request."""
        return {
            "username": params.username,
            "pin": params.password,
            "message": params.message,
            "mnumber": params.mobile_number,
            "signature": params.sender_id,
            "dlt_entity_id": self.entity_id or params.entity_id,
            "dlt_template_id": params.template_id,
            "msgType": params.message_type.value,
        }

    async def _send(self, params: SMSParams) -> str:
        logger.debug(
            "Submitting message to NIC gateway",
            extra={"sender_id": params.sender_id, "template_id": params.template_id},
        )

        response = await self._request("GET", self.url, params=self.build_query(params))

        logger.debug(f"NIC gateway response: {response.text}")
        return response.text
