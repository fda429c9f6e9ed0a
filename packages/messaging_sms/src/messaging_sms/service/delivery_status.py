"""
Delivery Status

Looks up handset delivery reports for messages already accepted by the
CDAC gateway.
"""

import logging

from messaging_sms.contracts.payloads import DeliveryReport
from messaging_sms.parsing.cdac import parse_delivery_report
from messaging_sms.providers.cdac.client import CDACSMSProvider
from messaging_sms.providers.credentials import GatewayCredentials

logger = logging.getLogger(__name__)


async def fetch_delivery_status(
    provider: CDACSMSProvider,
    credentials: GatewayCredentials,
    reference_id: str,
) -> list[DeliveryReport]:
    """
    Fetch and parse the delivery report for a CDAC reference id.

    Raises:
        TransportError / VendorHTTPError: Report endpoint unreachable or failing
        ParseError: Report body is malformed
    """
    raw = await provider.fetch_delivery_report(
        reference_id,
        username=credentials.username,
        password=credentials.password,
    )
    reports = parse_delivery_report(raw)

    logger.info(
        "Fetched delivery status",
        extra={"reference_id": reference_id, "reports": len(reports)},
    )
    return reports
