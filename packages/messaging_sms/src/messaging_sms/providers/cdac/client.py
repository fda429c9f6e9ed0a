"""
CDAC SMS Provider

Provider for the C-DAC Mobile Seva (MSDG) gateway.
Messages are submitted as a form-encoded POST authenticated with a
hashed password and a per-message SHA-512 key.

Sample responses:
    402,MsgID = 060320251741252969158appostsms
    Error 401 : Invalid Sender
"""

import logging

import httpx

from messaging_sms.contracts.payloads import Gateway
from messaging_sms.providers.base import DEFAULT_TIMEOUT_SECONDS, SMSParams, SMSProvider
from messaging_sms.providers.cdac.auth import password_digest, request_key, service_type

logger = logging.getLogger(__name__)


class CDACSMSProvider(SMSProvider):
    """
    C-DAC MSDG gateway provider.

    Also exposes the gateway's CSV delivery report endpoint.
    """

    gateway = Gateway.CDAC

    def __init__(
        self,
        url: str,
        delivery_status_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(url, timeout=timeout, transport=transport)
        self.delivery_status_url = delivery_status_url

    def build_form(self, params: SMSParams) -> dict[str, str]:
        """Build the form body for a send request."""
        return {
            "username": params.username,
            "password": password_digest(params.password),
            "mobileno": params.mobile_number,
            "senderid": params.sender_id,
            "content": params.message,
            "smsservicetype": service_type(params.message, params.message_type),
            "key": request_key(
                params.username, params.sender_id, params.message, params.secure_key
            ),
            "templateid": params.template_id,
        }

    async def _send(self, params: SMSParams) -> str:
        form = self.build_form(params)

        logger.debug(
            "Submitting message to CDAC gateway",
            extra={
                "sender_id": params.sender_id,
                "template_id": params.template_id,
                "smsservicetype": form["smsservicetype"],
            },
        )

        response = await self._request("POST", self.url, data=form)

        logger.debug(f"CDAC gateway response: {response.text}")
        return response.text

    async def fetch_delivery_report(
        self,
        reference_id: str,
        username: str,
        password: str,
    ) -> str:
        """
        Fetch the raw CSV delivery report for a submitted message.

        The gateway indexes reports by reference id suffixed with the account
        username; the suffix is added unless the reference already ends with it.

        Returns:
            Raw CSV body, one `mobile,status,timestamp` row per line
        """
        if not self.delivery_status_url:
            raise ValueError("CDAC delivery status URL is not configured")

        msg_id = reference_id if reference_id.endswith(username) else reference_id + username
        query = {
            "userid": username,
            "password": password_digest(password),
            "msgid": msg_id,
            "pwd_encrypted": "true",
        }

        response = await self._request("GET", self.delivery_status_url, params=query)

        logger.debug(
            "CDAC delivery report fetched",
            extra={"msg_id": msg_id, "length": len(response.text)},
        )
        return response.text
