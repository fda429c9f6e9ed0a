"""
CDAC Response Grammar

Send responses:
    402,MsgID = 060320251741252969158appostsms    accepted
    Error 401 : Invalid Sender                    rejected

Delivery reports are CSV, one `mobile,status,timestamp` row per line.
"""

import re

from messaging_sms.contracts.outcome import (
    INVALID_RESPONSE_CODE,
    INVALID_RESPONSE_TEXT,
    SUBMITTED_TEXT,
    UNPARSED_SUCCESS_CODE,
    Outcome,
    OutcomeStatus,
)
from messaging_sms.contracts.payloads import DeliveryReport, Gateway
from messaging_sms.errors import ParseError
from messaging_sms.parsing.grammar import GrammarRule, ResponseParser

ERROR_MARKER = "Error"

ERROR_PATTERN = re.compile(r"Error (\d+) : (.+)")
# Reference ids carry the account name as a suffix ("...appostsms")
SUBMITTED_PATTERN = re.compile(r"^(\d{3}),MsgID = (\d+\w*)")


def _is_error_reply(raw: str) -> bool:
    return raw[:5] == ERROR_MARKER


def _vendor_error(raw: str, match: "re.Match[str] | None") -> Outcome:
    return Outcome(
        status=OutcomeStatus.FAILURE,
        complete_response=raw,
        response_code=match.group(1),
        response_text=match.group(2).strip(),
    )


def _invalid_response(raw: str, match: "re.Match[str] | None") -> Outcome:
    return Outcome(
        status=OutcomeStatus.FAILURE,
        complete_response=raw,
        response_code=INVALID_RESPONSE_CODE,
        response_text=INVALID_RESPONSE_TEXT,
    )


def _submitted(raw: str, match: "re.Match[str] | None") -> Outcome:
    return Outcome(
        status=OutcomeStatus.SUCCESS,
        complete_response=raw,
        response_code=match.group(1),
        response_text=SUBMITTED_TEXT,
        reference_id=match.group(2),
    )


def _unparsed_success(raw: str, match: "re.Match[str] | None") -> Outcome:
    return Outcome(
        status=OutcomeStatus.SUCCESS,
        complete_response=raw,
        response_code=UNPARSED_SUCCESS_CODE,
        response_text=SUBMITTED_TEXT,
    )


CDAC_RULES = [
    GrammarRule("error_reply", _vendor_error, pattern=ERROR_PATTERN, guard=_is_error_reply),
    # Starts with the error marker but not in the documented shape
    GrammarRule("error_unrecognised", _invalid_response, guard=_is_error_reply, parsed=False),
    # An empty 200 body is not an acceptance
    GrammarRule("empty_body", _invalid_response, guard=lambda raw: not raw.strip(), parsed=False),
    GrammarRule("submitted", _submitted, pattern=SUBMITTED_PATTERN),
]

CDAC_FALLBACK = GrammarRule("unparsed_success", _unparsed_success, parsed=False)


def cdac_parser() -> ResponseParser:
    return ResponseParser(Gateway.CDAC, CDAC_RULES, CDAC_FALLBACK)


def parse_delivery_report(text: str) -> list[DeliveryReport]:
    """
    Parse a CDAC CSV delivery report.

    Blank lines are skipped. Extra columns after the timestamp are ignored.

    Raises:
        ParseError: A line has fewer than three fields
    """
    reports = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue

        fields = [field.strip() for field in line.split(",")]
        if len(fields) < 3:
            raise ParseError(
                f"Malformed delivery report line {line_no}: {line!r}",
                code="INVALID_REPORT",
                details={"line": line_no, "text": line},
            )

        reports.append(
            DeliveryReport(mobile_number=fields[0], sms_status=fields[1], timestamp=fields[2])
        )

    return reports
