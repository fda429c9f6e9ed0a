"""
Outcome Reconciler

Writes vendor outcomes back onto stored requests, each in its own
transaction, separate from the one that created the request.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from messaging_sms.contracts.outcome import Outcome
from messaging_sms.errors import ReconciliationError
from messaging_sms.persistence.repo import SMSRepository

logger = logging.getLogger(__name__)


class Reconciler:
    """Persists outcomes keyed by communication_id."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def reconcile(self, communication_id: str, outcome: Outcome) -> None:
        """
        Record an outcome against its request.

        Re-reconciling the same communication_id with an outcome of the same
        classification overwrites the outcome columns; it never creates a
        second record. An outcome that would move a submitted or failed
        request to a different status is rejected and the stored row is kept.

        Raises:
            ReconciliationError: No such request, conflicting outcome, or the
                write failed
        """
        try:
            with self.session_factory.begin() as db:
                row = SMSRepository(db).update_outcome(communication_id, outcome)
                if row is None:
                    raise ReconciliationError(
                        f"No request found for communication_id: {communication_id}",
                        code="REQUEST_NOT_FOUND",
                        details={"communication_id": communication_id},
                    )
                status = row.status
                if status != outcome.request_status.value:
                    raise ReconciliationError(
                        f"Request {communication_id} is already {status}, "
                        f"refusing {outcome.request_status.value} outcome",
                        code="OUTCOME_CONFLICT",
                        details={
                            "communication_id": communication_id,
                            "status": status,
                            "response_code": outcome.response_code,
                        },
                    )
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to reconcile outcome: {e}",
                extra={"communication_id": communication_id},
            )
            raise ReconciliationError(
                f"Failed to reconcile outcome for {communication_id}: {e}",
                code="RECONCILE_FAILED",
                details={"communication_id": communication_id},
                retryable=True,
            ) from e

        logger.info(
            "Reconciled SMS outcome",
            extra={
                "communication_id": communication_id,
                "status": status,
                "response_code": outcome.response_code,
                "rule": outcome.rule,
            },
        )
