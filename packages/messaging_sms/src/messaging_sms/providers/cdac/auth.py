"""
CDAC Authentication Helpers

The CDAC gateway never receives the plain password. Each request carries:
- password: hex digest (SHA-1) of the account password
- key: hex SHA-512 of username + sender id + message content + secure key
"""

import hashlib

from messaging_sms.contracts.payloads import MessageType

PASSWORD_DIGEST_ALGORITHM = "sha1"


def password_digest(password: str, algorithm: str = PASSWORD_DIGEST_ALGORITHM) -> str:
    """Hex digest of the account password, as the gateway expects it."""
    return hashlib.new(algorithm, password.encode("utf-8")).hexdigest()


def request_key(username: str, sender_id: str, content: str, secure_key: str) -> str:
    """
    Per-message authentication key.

    Deterministic: the same four inputs always produce the same key.
    content must be the message exactly as submitted (after encoding).
    """
    material = f"{username}{sender_id}{content}{secure_key}"
    return hashlib.sha512(material.encode("utf-8")).hexdigest()


def service_type(content: str, message_type: MessageType) -> str:
    """
    Select the smsservicetype form value.

    Unicode messages always go as unicodemsg; otherwise any mention of
    "otp" (any case) marks the message as an OTP.
    """
    if message_type == MessageType.UNICODE:
        return "unicodemsg"
    if "otp" in content.lower():
        return "otpmsg"
    return "singlemsg"
