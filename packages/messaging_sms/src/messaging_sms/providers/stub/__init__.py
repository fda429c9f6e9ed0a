"""Stub SMS provider for development."""

from messaging_sms.providers.stub.client import StubSMSProvider

__all__ = ["StubSMSProvider"]
