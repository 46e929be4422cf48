"""Account model."""

from sqlalchemy import Column, String

from prooflog.database import Base
from prooflog.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Account(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Registered user. Owns entries; never deleted."""

    __tablename__ = "accounts"

    email = Column(String(255), unique=True, nullable=False, index=True)
    # Email local-part, fixed at registration and used as the public route key
    handle = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
