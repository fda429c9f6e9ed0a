"""C-DAC MSDG SMS provider."""

from messaging_sms.providers.cdac.auth import password_digest, request_key, service_type
from messaging_sms.providers.cdac.client import CDACSMSProvider

__all__ = [
    "CDACSMSProvider",
    "password_digest",
    "request_key",
    "service_type",
]
