"""
Message Encoding

Rewrites unicode message text into the form each gateway expects:
- CDAC: decimal HTML numeric character references (&#2344;)
- NIC: 4-digit uppercase hexadecimal code points, no separator (0928)

Plain text messages are passed through unchanged.
"""

from messaging_sms.contracts.payloads import Gateway, MessageType


def to_numeric_references(text: str) -> str:
    """Encode every character as a decimal numeric character reference."""
    return "".join(f"&#{ord(char)};" for char in text)


def to_hex_code_points(text: str) -> str:
    """Encode every character as an uppercase hex code point, at least 4 digits wide."""
    return "".join(f"{ord(char):04X}" for char in text)


_UNICODE_ENCODERS = {
    Gateway.CDAC: to_numeric_references,
    Gateway.NIC: to_hex_code_points,
}


def encode_message(text: str, message_type: MessageType, gateway: Gateway) -> str:
    """Return the message text in the encoding the gateway expects."""
    if message_type != MessageType.UNICODE:
        return text
    return _UNICODE_ENCODERS[gateway](text)
