"""
NIC Response Grammar

    Message Accepted for Request ID=123456789~code=API000 & Info=Platform Accepted
"""

import re

from messaging_sms.contracts.outcome import (
    INVALID_RESPONSE_CODE,
    SUBMITTED_TEXT,
    UNPARSED_SUCCESS_CODE,
    Outcome,
    OutcomeStatus,
)
from messaging_sms.contracts.payloads import Gateway
from messaging_sms.parsing.grammar import GrammarRule, ResponseParser

ACCEPTED_MARKER = "Message Accepted"
UNEXPECTED_RESPONSE_TEXT = "unexpected response from sms gateway"

REQUEST_ID_PATTERN = re.compile(r"Request ID=(\d+)~code=([A-Z0-9]+)")


def _request_accepted(raw: str, match: "re.Match[str] | None") -> Outcome:
    return Outcome(
        status=OutcomeStatus.SUCCESS,
        complete_response=raw,
        response_code=match.group(2),
        response_text=SUBMITTED_TEXT,
        reference_id=match.group(1),
    )


def _accepted_without_id(raw: str, match: "re.Match[str] | None") -> Outcome:
    return Outcome(
        status=OutcomeStatus.SUCCESS,
        complete_response=raw,
        response_code=UNPARSED_SUCCESS_CODE,
        response_text=SUBMITTED_TEXT,
    )


def _unexpected(raw: str, match: "re.Match[str] | None") -> Outcome:
    return Outcome(
        status=OutcomeStatus.FAILURE,
        complete_response=raw,
        response_code=INVALID_RESPONSE_CODE,
        response_text=UNEXPECTED_RESPONSE_TEXT,
    )


NIC_RULES = [
    GrammarRule("request_accepted", _request_accepted, pattern=REQUEST_ID_PATTERN),
    GrammarRule("accepted_marker", _accepted_without_id, guard=lambda raw: ACCEPTED_MARKER in raw),
]

NIC_FALLBACK = GrammarRule("unexpected", _unexpected, parsed=False)


def nic_parser() -> ResponseParser:
    return ResponseParser(Gateway.NIC, NIC_RULES, NIC_FALLBACK)
