"""
SMS Providers

Adapters for the SMS vendor gateways.
Supports C-DAC MSDG and NIC (production) and Stub (development).
"""

from messaging_sms.providers.base import (
    ProviderError,
    SMSParams,
    SMSProvider,
    TransportError,
    VendorHTTPError,
)
from messaging_sms.providers.credentials import CredentialProvider, GatewayCredentials
from messaging_sms.providers.registry import build_provider_registry

__all__ = [
    "SMSProvider",
    "SMSParams",
    "ProviderError",
    "TransportError",
    "VendorHTTPError",
    "CredentialProvider",
    "GatewayCredentials",
    "build_provider_registry",
]
