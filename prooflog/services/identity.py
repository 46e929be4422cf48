"""Public handles.

A handle is the local-part of an account's email. It is computed once at
registration, stored in a unique column and looked up by exact match, so a
handle that is a prefix of another never resolves to the longer one.
"""

from sqlalchemy.orm import Session

from prooflog.models.account import Account
from prooflog.services.errors import NotFound


def handle_of(email: str) -> str:
    """Return the part of an email before ``@``, lowercased."""
    return email.strip().lower().split("@", 1)[0]


def resolve_handle(db: Session, handle: str) -> Account:
    """Find the account owning a handle (case-insensitive)."""
    account = db.query(Account).filter(Account.handle == handle.strip().lower()).first()
    if account is None:
        raise NotFound("Public profile not found")
    return account
