"""SQLAlchemy models."""

from prooflog.models.account import Account
from prooflog.models.entry import Entry

__all__ = [
    "Account",
    "Entry",
]
