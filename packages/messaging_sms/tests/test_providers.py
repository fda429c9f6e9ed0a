"""
Tests for the CDAC and NIC gateway providers.

Gateway HTTP is faked with httpx.MockTransport.
"""

import asyncio
import hashlib
from urllib.parse import parse_qs

import httpx
import pytest

from basecore.settings import SenderCredential, Settings

from messaging_sms.contracts.payloads import Gateway, MessageType
from messaging_sms.errors import MissingCredentialsError
from messaging_sms.providers.base import SMSParams, TransportError, VendorHTTPError
from messaging_sms.providers.cdac import CDACSMSProvider
from messaging_sms.providers.credentials import CredentialProvider
from messaging_sms.providers.nic import NICSMSProvider
from messaging_sms.providers.registry import build_provider_registry
from messaging_sms.providers.stub import StubSMSProvider

CDAC_URL = "https://cdac.example.com/esms/sendsmsrequestDLT"
CDAC_REPORT_URL = "https://cdac.example.com/ReportAPI/csvreport"
NIC_URL = "https://nic.example.com/failsafe/HttpLink"


def run(coro_factory, provider):
    """Run a provider call and close its client in the same event loop."""

    async def _run():
        try:
            return await coro_factory()
        finally:
            await provider.close()

    return asyncio.run(_run())


@pytest.fixture
def sms_params():
    return SMSParams(
        username="appostsms",
        password="cdac-pass",
        message="Your OTP is 1234",
        sender_id="INPOST",
        mobile_number="9634294395",
        template_id="1007344609998507114",
        entity_id="1001081725895192800",
        secure_key="secure-key",
    )


class TestCDACProvider:
    """Tests for the CDAC form POST."""

    def test_form_fields(self, sms_params):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["url"] = str(request.url)
            captured["form"] = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            return httpx.Response(200, text="402,MsgID = 123appostsms")

        provider = CDACSMSProvider(CDAC_URL, transport=httpx.MockTransport(handler))
        raw = run(lambda: provider.send(sms_params), provider)

        assert raw == "402,MsgID = 123appostsms"
        assert captured["method"] == "POST"
        assert captured["url"] == CDAC_URL

        form = captured["form"]
        assert form["username"] == "appostsms"
        assert form["password"] == hashlib.sha1(b"cdac-pass").hexdigest()
        assert form["mobileno"] == "9634294395"
        assert form["senderid"] == "INPOST"
        assert form["content"] == "Your OTP is 1234"
        assert form["smsservicetype"] == "otpmsg"
        assert form["templateid"] == "1007344609998507114"
        assert form["key"] == hashlib.sha512(
            b"appostsmsINPOSTYour OTP is 1234secure-key"
        ).hexdigest()

    def test_plain_password_never_sent(self, sms_params):
        form = CDACSMSProvider(CDAC_URL).build_form(sms_params)
        assert "cdac-pass" not in form.values()

    def test_non_success_status(self, sms_params):
        transport = httpx.MockTransport(lambda request: httpx.Response(503, text="busy"))
        provider = CDACSMSProvider(CDAC_URL, transport=transport)

        with pytest.raises(VendorHTTPError) as exc_info:
            run(lambda: provider.send(sms_params), provider)

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "busy"
        assert exc_info.value.retryable is True

    def test_connect_error(self, sms_params):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = CDACSMSProvider(CDAC_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            run(lambda: provider.send(sms_params), provider)

        assert exc_info.value.code == "HTTP_ERROR"

    def test_slow_gateway_times_out(self, sms_params):
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, text="402,MsgID = 1")

        provider = CDACSMSProvider(CDAC_URL, timeout=0.05, transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            run(lambda: provider.send(sms_params), provider)

        assert exc_info.value.code == "TIMEOUT"

    def test_delivery_report_query(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["params"] = dict(request.url.params)
            return httpx.Response(200, text="9634294395,DELIVRD,2025-03-06 17:41:30\n")

        provider = CDACSMSProvider(
            CDAC_URL,
            delivery_status_url=CDAC_REPORT_URL,
            transport=httpx.MockTransport(handler),
        )
        raw = run(lambda: provider.fetch_delivery_report("0603", "appostsms", "cdac-pass"), provider)

        assert raw.startswith("9634294395,DELIVRD")
        assert captured["params"] == {
            "userid": "appostsms",
            "password": hashlib.sha1(b"cdac-pass").hexdigest(),
            "msgid": "0603appostsms",
            "pwd_encrypted": "true",
        }

    def test_delivery_report_reference_already_suffixed(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["msgid"] = request.url.params["msgid"]
            return httpx.Response(200, text="")

        provider = CDACSMSProvider(
            CDAC_URL,
            delivery_status_url=CDAC_REPORT_URL,
            transport=httpx.MockTransport(handler),
        )
        run(lambda: provider.fetch_delivery_report("0603appostsms", "appostsms", "x"), provider)

        assert captured["msgid"] == "0603appostsms"


class TestNICProvider:
    """Tests for the NIC GET request."""

    def test_query_params(self, sms_params):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["params"] = dict(request.url.params)
            return httpx.Response(200, text="Request ID=98765~code=OK")

        provider = NICSMSProvider(
            NIC_URL, entity_id="1001000000000000001", transport=httpx.MockTransport(handler)
        )
        raw = run(lambda: provider.send(sms_params), provider)

        assert raw == "Request ID=98765~code=OK"
        assert captured["method"] == "GET"
        assert captured["params"] == {
            "username": "appostsms",
            "pin": "cdac-pass",
            "message": "Your OTP is 1234",
            "mnumber": "9634294395",
            "signature": "INPOST",
            "dlt_entity_id": "1001000000000000001",
            "dlt_template_id": "1007344609998507114",
            "msgType": "PM",
        }

    def test_request_entity_id_when_not_configured(self, sms_params):
        query = NICSMSProvider(NIC_URL).build_query(sms_params)
        assert query["dlt_entity_id"] == "1001081725895192800"

    def test_unicode_message_type(self, sms_params):
        sms_params.message_type = MessageType.UNICODE
        assert NICSMSProvider(NIC_URL).build_query(sms_params)["msgType"] == "UC"

    def test_read_timeout(self, sms_params):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider = NICSMSProvider(NIC_URL, transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            run(lambda: provider.send(sms_params), provider)

        assert exc_info.value.code == "TIMEOUT"
        assert exc_info.value.retryable is True


class TestStubProvider:
    """Tests for the stub provider."""

    def test_records_and_answers(self, sms_params):
        provider = StubSMSProvider(Gateway.NIC, response_text="Request ID=1~code=OK")
        raw = asyncio.run(provider.send(sms_params))

        assert raw == "Request ID=1~code=OK"
        assert len(provider.sent_messages) == 1
        assert provider.sent_messages[0]["mobile_number"] == "9634294395"

    def test_default_response_per_gateway(self, sms_params):
        raw = asyncio.run(StubSMSProvider(Gateway.CDAC).send(sms_params))
        assert raw.startswith("402,MsgID = ")

    def test_configured_error(self, sms_params):
        provider = StubSMSProvider(Gateway.CDAC, error=TransportError("down", code="HTTP_ERROR"))

        with pytest.raises(TransportError):
            asyncio.run(provider.send(sms_params))


class TestSMSParams:
    """Tests for SMSParams."""

    def test_repr_hides_secrets(self, sms_params):
        text = repr(sms_params)
        assert "cdac-pass" not in text
        assert "secure-key" not in text


class TestCredentials:
    """Tests for gateway credential lookup."""

    def test_nic_by_sender(self, credentials):
        creds = credentials.for_request(Gateway.NIC, "dopbnk")
        assert creds.username == "nic.dopbnk"

    def test_nic_unknown_sender(self, credentials):
        with pytest.raises(MissingCredentialsError) as exc_info:
            credentials.for_request(Gateway.NIC, "UNKNWN")

        assert exc_info.value.code == "INVALID_SENDER"

    def test_cdac_single_account(self, credentials):
        assert credentials.for_request(Gateway.CDAC, "ANYSND").secure_key == "secure-key"

    def test_cdac_not_configured(self):
        with pytest.raises(MissingCredentialsError):
            CredentialProvider().for_request(Gateway.CDAC, "INPOST")

    def test_from_settings(self):
        settings = Settings(
            SMS_CDAC_USERNAME="appostsms",
            SMS_CDAC_PASSWORD="pass",
            SMS_CDAC_SECURE_KEY="key",
            SMS_NIC_CREDENTIALS={
                "INPOST": SenderCredential(username="u1", password="p1"),
                "DOPPLI": SenderCredential(username="u2", password="p2"),
            },
        )
        provider = CredentialProvider.from_settings(settings)

        assert provider.for_request(Gateway.CDAC, "INPOST").username == "appostsms"
        assert provider.for_request(Gateway.NIC, "DOPPLI").password == "p2"


class TestProviderRegistry:
    """Tests for build_provider_registry."""

    def test_one_provider_per_gateway(self):
        settings = Settings(SMS_DLT_ENTITY_ID="1001", SMS_VENDOR_TIMEOUT_SECONDS=5)
        registry = build_provider_registry(settings)

        assert isinstance(registry[Gateway.CDAC], CDACSMSProvider)
        assert isinstance(registry[Gateway.NIC], NICSMSProvider)
        assert registry[Gateway.NIC].entity_id == "1001"
        assert registry[Gateway.CDAC].timeout == 5

    def test_stub_registry(self):
        registry = build_provider_registry(Settings(), stub=True)
        assert all(isinstance(p, StubSMSProvider) for p in registry.values())
        assert set(registry) == {Gateway.CDAC, Gateway.NIC}
