"""Entry model."""

from sqlalchemy import JSON, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from prooflog.database import Base
from prooflog.models.enums import Visibility
from prooflog.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Entry(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A logged lab, project, algorithm note or certificate.

    Proofs are embedded as a JSON list of
    ``{key, original_name, content_type, size, uploaded_at}`` records.
    """

    __tablename__ = "entries"

    owner_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    visibility = Column(String(10), nullable=False, default=Visibility.PRIVATE.value, index=True)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    proofs = Column(JSON, nullable=False, default=list)

    # Relationships
    owner = relationship("Account", backref="entries")

    @property
    def is_public(self) -> bool:
        return self.visibility == Visibility.PUBLIC.value
