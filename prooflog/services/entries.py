"""Entry store: owner-scoped CRUD plus the public, visibility-scoped read path."""

import logging
import uuid

from sqlalchemy import or_
from sqlalchemy.orm import Session

from prooflog.models.account import Account
from prooflog.models.entry import Entry
from prooflog.models.enums import EntryType, Visibility
from prooflog.schemas.entry import EntryFields
from prooflog.services.errors import InvalidId, NotFound
from prooflog.services.identity import resolve_handle

logger = logging.getLogger(__name__)


def parse_entry_id(value: str) -> str:
    """Return the canonical form of an entry id or raise ``InvalidId``."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError as e:
        raise InvalidId() from e


def entry_values(fields: EntryFields) -> dict:
    """Column values for a validated set of entry fields."""
    return {
        "type": fields.type.value,
        "title": fields.title,
        "description": fields.description,
        "tags": list(fields.tags),
        "visibility": fields.visibility.value,
        "date": fields.date.isoformat(),
    }


class EntryService:
    """Service for entry reads and writes.

    Every owner-scoped query filters on both the entry id and the owner id, so a
    caller naming somebody else's entry gets ``NotFound`` and nothing is read or
    written.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, owner_id: str, fields: EntryFields) -> Entry:
        entry = Entry(owner_id=owner_id, proofs=[], **entry_values(fields))
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def list_owned(
        self,
        owner_id: str,
        query: str | None = None,
        entry_type: EntryType | None = None,
    ) -> list[Entry]:
        """All of an owner's entries, newest first, optionally filtered."""
        q = self.db.query(Entry).filter(Entry.owner_id == owner_id)
        if entry_type is not None:
            q = q.filter(Entry.type == entry_type.value)
        if query and query.strip():
            pattern = f"%{query.strip()}%"
            q = q.filter(or_(Entry.title.ilike(pattern), Entry.description.ilike(pattern)))
        return q.order_by(Entry.created_at.desc()).all()

    def get_owned(self, owner_id: str, entry_id: str) -> Entry:
        entry_id = parse_entry_id(entry_id)
        entry = (
            self.db.query(Entry).filter(Entry.id == entry_id, Entry.owner_id == owner_id).first()
        )
        if entry is None:
            raise NotFound("Entry not found")
        return entry

    def update_owned(self, owner_id: str, entry_id: str, fields: EntryFields) -> Entry:
        """Replace an entry's fields with a single filtered UPDATE."""
        entry_id = parse_entry_id(entry_id)
        matched = (
            self.db.query(Entry)
            .filter(Entry.id == entry_id, Entry.owner_id == owner_id)
            .update(entry_values(fields), synchronize_session=False)
        )
        if not matched:
            self.db.rollback()
            raise NotFound("Entry not found")
        self.db.commit()
        return self.get_owned(owner_id, entry_id)

    def delete_owned(self, owner_id: str, entry_id: str) -> None:
        entry_id = parse_entry_id(entry_id)
        deleted = (
            self.db.query(Entry)
            .filter(Entry.id == entry_id, Entry.owner_id == owner_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            self.db.rollback()
            raise NotFound("Entry not found")
        self.db.commit()
        logger.info(f"Deleted entry {entry_id} for owner {owner_id}")

    def list_public(self, handle: str) -> tuple[Account, list[Entry]]:
        """Public entries for a handle, most recent entry date first."""
        account = resolve_handle(self.db, handle)
        entries = (
            self.db.query(Entry)
            .filter(Entry.owner_id == account.id, Entry.visibility == Visibility.PUBLIC.value)
            .order_by(Entry.date.desc(), Entry.created_at.desc())
            .all()
        )
        return account, entries

    def get_public(self, handle: str, entry_id: str) -> Entry:
        entry_id = parse_entry_id(entry_id)
        account = resolve_handle(self.db, handle)
        entry = (
            self.db.query(Entry)
            .filter(
                Entry.id == entry_id,
                Entry.owner_id == account.id,
                Entry.visibility == Visibility.PUBLIC.value,
            )
            .first()
        )
        if entry is None:
            raise NotFound("Public entry not found")
        return entry
