"""
Tests for gateway message encoding.
"""

import html

from messaging_sms.contracts.payloads import Gateway, MessageType
from messaging_sms.encoding import encode_message, to_hex_code_points, to_numeric_references


class TestNumericReferences:
    """CDAC unicode form."""

    def test_encodes_every_character(self):
        assert to_numeric_references("नम") == "&#2344;&#2350;"

    def test_ascii_is_encoded_too(self):
        assert to_numeric_references("A 1") == "&#65;&#32;&#49;"

    def test_reversible(self):
        """Numeric references decode back to the original text."""
        text = "प्रिय ग्राहक, OTP 1234 है।"
        assert html.unescape(to_numeric_references(text)) == text

    def test_empty(self):
        assert to_numeric_references("") == ""


class TestHexCodePoints:
    """NIC unicode form."""

    def test_four_digit_uppercase(self):
        assert to_hex_code_points("नम") == "0928092E"

    def test_ascii_padded(self):
        assert to_hex_code_points("A") == "0041"

    def test_no_separator(self):
        assert len(to_hex_code_points("abc")) == 12


class TestEncodeMessage:
    """Tests for encode_message dispatching on type and gateway."""

    def test_plain_text_unchanged_for_both_gateways(self):
        text = "Your OTP is 1234"
        assert encode_message(text, MessageType.PLAIN_TEXT, Gateway.CDAC) == text
        assert encode_message(text, MessageType.PLAIN_TEXT, Gateway.NIC) == text

    def test_unicode_cdac(self):
        assert encode_message("न", MessageType.UNICODE, Gateway.CDAC) == "&#2344;"

    def test_unicode_nic(self):
        assert encode_message("न", MessageType.UNICODE, Gateway.NIC) == "0928"
