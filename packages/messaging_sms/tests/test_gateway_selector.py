"""
Tests for gateway resolution from the template registry.
"""

import pytest

from conftest import (
    CDAC_TEMPLATE_ID,
    INACTIVE_TEMPLATE_ID,
    NIC_TEMPLATE_ID,
    UNKNOWN_GATEWAY_TEMPLATE_ID,
)
from messaging_sms.contracts.payloads import Gateway, MessageType
from messaging_sms.errors import GatewayResolutionError, UnsupportedGatewayError
from messaging_sms.routing import GatewaySelector


@pytest.fixture
def db(session_factory, templates):
    session = session_factory()
    yield session
    session.close()


class TestGatewaySelector:
    """Tests for GatewaySelector.resolve."""

    def test_resolve_cdac(self, db):
        route = GatewaySelector(db).resolve(CDAC_TEMPLATE_ID)

        assert route.gateway == Gateway.CDAC
        assert route.sender_id == "INPOST"
        assert route.entity_id == "1001081725895192800"
        assert route.message_type is None

    def test_resolve_nic_with_message_type(self, db):
        route = GatewaySelector(db).resolve(NIC_TEMPLATE_ID, application_id="4")

        assert route.gateway == Gateway.NIC
        assert route.message_type == MessageType.PLAIN_TEXT

    def test_application_in_delimited_list(self, db):
        route = GatewaySelector(db).resolve(CDAC_TEMPLATE_ID, application_id="7")
        assert route.gateway == Gateway.CDAC

    def test_application_not_mapped(self, db):
        with pytest.raises(GatewayResolutionError) as exc_info:
            GatewaySelector(db).resolve(NIC_TEMPLATE_ID, application_id="7")

        assert exc_info.value.code == "TEMPLATE_NOT_MAPPED"

    def test_unknown_template(self, db):
        with pytest.raises(GatewayResolutionError) as exc_info:
            GatewaySelector(db).resolve("0000000000000000000")

        assert exc_info.value.code == "TEMPLATE_NOT_FOUND"

    def test_inactive_template(self, db):
        with pytest.raises(GatewayResolutionError):
            GatewaySelector(db).resolve(INACTIVE_TEMPLATE_ID)

    def test_unsupported_gateway(self, db):
        with pytest.raises(UnsupportedGatewayError) as exc_info:
            GatewaySelector(db).resolve(UNKNOWN_GATEWAY_TEMPLATE_ID)

        assert exc_info.value.gateway == "9"
        assert isinstance(exc_info.value, GatewayResolutionError)


class TestGatewayParse:
    """Tests for Gateway.parse."""

    def test_known_ids(self):
        assert Gateway.parse("1") == Gateway.CDAC
        assert Gateway.parse(" 2 ") == Gateway.NIC
        assert Gateway.parse(Gateway.NIC) == Gateway.NIC

    @pytest.mark.parametrize("value", ["3", "", None, "cdac"])
    def test_unknown_ids(self, value):
        with pytest.raises(UnsupportedGatewayError):
            Gateway.parse(value)
