"""
Tests for CDAC authentication derivation.
"""

import hashlib

from messaging_sms.contracts.payloads import MessageType
from messaging_sms.providers.cdac.auth import password_digest, request_key, service_type


class TestPasswordDigest:
    """Tests for the hashed password field."""

    def test_sha1_hex(self):
        assert password_digest("secret") == hashlib.sha1(b"secret").hexdigest()

    def test_algorithm_override(self):
        assert password_digest("secret", algorithm="md5") == hashlib.md5(b"secret").hexdigest()


class TestRequestKey:
    """Tests for the per-message key."""

    def test_sha512_of_concatenation(self):
        expected = hashlib.sha512(b"userINPOSTHello worldkey").hexdigest()
        assert request_key("user", "INPOST", "Hello world", "key") == expected

    def test_deterministic(self):
        first = request_key("user", "INPOST", "Hello", "key")
        second = request_key("user", "INPOST", "Hello", "key")
        assert first == second

    def test_content_changes_key(self):
        assert request_key("user", "INPOST", "Hello", "key") != request_key(
            "user", "INPOST", "Hello!", "key"
        )

    def test_unicode_content(self):
        key = request_key("user", "INPOST", "&#2344;", "key")
        assert len(key) == 128


class TestServiceType:
    """Tests for smsservicetype selection."""

    def test_unicode_wins(self):
        assert service_type("Your OTP is 1", MessageType.UNICODE) == "unicodemsg"

    def test_otp_case_insensitive(self):
        assert service_type("Your OTP is 1234", MessageType.PLAIN_TEXT) == "otpmsg"
        assert service_type("your otp is 1234", MessageType.PLAIN_TEXT) == "otpmsg"
        assert service_type("One-Time Otp", MessageType.PLAIN_TEXT) == "otpmsg"

    def test_single_message(self):
        assert service_type("Your parcel has been delivered", MessageType.PLAIN_TEXT) == "singlemsg"
