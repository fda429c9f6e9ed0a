"""
Pytest fixtures for SMS engine tests.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from messaging_sms.contracts.payloads import Priority, SMSRequest
from messaging_sms.persistence.models import SMSBase
from messaging_sms.persistence.repo import SMSRepository
from messaging_sms.providers.credentials import CredentialProvider, GatewayCredentials

CDAC_TEMPLATE_ID = "1007000000000000001"
NIC_TEMPLATE_ID = "1007000000000000002"
INACTIVE_TEMPLATE_ID = "1007000000000000003"
UNICODE_TEMPLATE_ID = "1007000000000000004"
UNKNOWN_GATEWAY_TEMPLATE_ID = "1007000000000000009"


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SMSBase.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False)
    engine.dispose()


@pytest.fixture
def templates(session_factory):
    """Template registry rows for both gateways."""
    with session_factory.begin() as db:
        repo = SMSRepository(db)
        repo.create_template(
            template_id=CDAC_TEMPLATE_ID,
            application_id="4, 7",
            gateway="1",
            sender_id="INPOST",
            entity_id="1001081725895192800",
        )
        repo.create_template(
            template_id=NIC_TEMPLATE_ID,
            application_id="4",
            gateway="2",
            sender_id="DOPBNK",
            entity_id="1001081725895192800",
            message_type="PM",
        )
        repo.create_template(
            template_id=INACTIVE_TEMPLATE_ID,
            application_id="4",
            gateway="1",
            is_active=False,
        )
        repo.create_template(
            template_id=UNICODE_TEMPLATE_ID,
            application_id="4",
            gateway="2",
            sender_id="INPOST",
            message_type="UC",
        )
        repo.create_template(
            template_id=UNKNOWN_GATEWAY_TEMPLATE_ID,
            application_id="4",
            gateway="9",
        )


@pytest.fixture
def credentials():
    """Credentials for the CDAC account and two NIC senders."""
    return CredentialProvider(
        cdac=GatewayCredentials(username="appostsms", password="cdac-pass", secure_key="secure-key"),
        nic={
            "INPOST": GatewayCredentials(username="nic.inpost", password="pin-1"),
            "DOPBNK": GatewayCredentials(username="nic.dopbnk", password="pin-2"),
        },
    )


@pytest.fixture
def redis_client():
    """Redis double that accepts every XADD."""
    client = MagicMock()
    client.xadd.return_value = "1700000000000-0"
    return client


@pytest.fixture
def make_request():
    """Build an SMS request with sensible defaults."""

    def _make(**overrides):
        fields = {
            "application_id": "4",
            "facility_id": "facility1",
            "priority": Priority.OTP,
            "message_text": "Dear Customer, OTP for booking is 1234 - INDPOST",
            "sender_id": "",
            "mobile_numbers": "9634294395",
            "template_id": CDAC_TEMPLATE_ID,
        }
        fields.update(overrides)
        return SMSRequest(**fields)

    return _make
