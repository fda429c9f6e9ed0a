"""
SMS Service Layer

Dispatch coordinator, outcome reconciliation and delivery status lookup.
"""

from messaging_sms.service.delivery_status import fetch_delivery_status
from messaging_sms.service.dispatcher import (
    DispatchOptions,
    DispatchResult,
    DispatchStatus,
    SMSDispatcher,
)
from messaging_sms.service.reconciler import Reconciler

__all__ = [
    "SMSDispatcher",
    "DispatchOptions",
    "DispatchResult",
    "DispatchStatus",
    "Reconciler",
    "fetch_delivery_status",
]
