"""
Dispatch Outcome

Normalized result of a single vendor round-trip.
"""

from dataclasses import dataclass
from enum import Enum

from messaging_sms.contracts.payloads import RequestStatus

# Fixed response codes used when the vendor did not supply one
TRANSPORT_FAILURE_CODE = "02"
INVALID_RESPONSE_CODE = "400"
UNPARSED_SUCCESS_CODE = "402"

SUBMITTED_TEXT = "Submitted Successfully"
INVALID_RESPONSE_TEXT = "Invalid Response"


class OutcomeStatus(str, Enum):
    """Classification of a vendor round-trip."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Outcome:
    """
    Result of one vendor round-trip.

    complete_response always holds the vendor text verbatim, including when
    no grammar rule could parse it (parsed=False).
    """

    status: OutcomeStatus
    complete_response: str
    response_code: str
    response_text: str
    reference_id: str = ""
    communication_id: str = ""
    rule: str | None = None  # grammar rule that produced this outcome
    parsed: bool = True

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def request_status(self) -> RequestStatus:
        """Terminal request status this outcome moves the request to."""
        return RequestStatus.SUBMITTED if self.is_success else RequestStatus.FAILED

    @classmethod
    def transport_failure(cls, error: Exception, raw_text: str = "") -> "Outcome":
        """Failure outcome for a vendor call that never produced a parseable body."""
        return cls(
            status=OutcomeStatus.FAILURE,
            complete_response=raw_text,
            response_code=TRANSPORT_FAILURE_CODE,
            response_text=str(error),
            rule="transport_error",
        )

