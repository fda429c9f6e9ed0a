"""
SMS Engine Persistence

SQLAlchemy models and repository for the SMS engine tables.
"""

from messaging_sms.persistence.models import MsgRequest, MsgTemplate, SMSBase
from messaging_sms.persistence.repo import SMSRepository

__all__ = [
    "SMSBase",
    "MsgTemplate",
    "MsgRequest",
    "SMSRepository",
]
