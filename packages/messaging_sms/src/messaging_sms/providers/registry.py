"""
Provider Registry

Builds the gateway -> provider map used by the dispatcher.
"""

import httpx
from basecore.settings import Settings

from messaging_sms.contracts.payloads import Gateway
from messaging_sms.providers.base import SMSProvider
from messaging_sms.providers.cdac.client import CDACSMSProvider
from messaging_sms.providers.nic.client import NICSMSProvider
from messaging_sms.providers.stub.client import StubSMSProvider


def build_provider_registry(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
    stub: bool = False,
) -> dict[Gateway, SMSProvider]:
    """
    Create one provider per supported gateway.

    Args:
        settings: Application settings (URLs, timeout, DLT entity id)
        transport: Optional httpx transport, shared by all providers
        stub: Use stub providers that never leave the process

    Returns:
        Mapping of gateway to provider
    """
    if stub:
        return {gateway: StubSMSProvider(gateway) for gateway in Gateway}

    timeout = settings.SMS_VENDOR_TIMEOUT_SECONDS
    return {
        Gateway.CDAC: CDACSMSProvider(
            url=settings.SMS_CDAC_URL,
            delivery_status_url=settings.SMS_CDAC_DELIVERY_STATUS_URL,
            timeout=timeout,
            transport=transport,
        ),
        Gateway.NIC: NICSMSProvider(
            url=settings.SMS_NIC_URL,
            entity_id=settings.SMS_DLT_ENTITY_ID,
            timeout=timeout,
            transport=transport,
        ),
    }
