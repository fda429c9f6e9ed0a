"""NIC SMS gateway provider."""

from messaging_sms.providers.nic.client import NICSMSProvider

__all__ = ["NICSMSProvider"]
