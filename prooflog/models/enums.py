"""Enums for model fields."""

from enum import Enum


class EntryType(str, Enum):
    """Kinds of portfolio entry."""

    LAB = "AWS Lab"
    PROJECT = "Project"
    ALGORITHM_NOTE = "DSA"
    CERTIFICATE = "Certificate"


class Visibility(str, Enum):
    """Whether an entry appears on its owner's public profile."""

    PRIVATE = "private"
    PUBLIC = "public"

    @classmethod
    def coerce(cls, value: object) -> "Visibility":
        """Anything other than an exact ``"public"`` is private."""
        if value == cls.PUBLIC.value:
            return cls.PUBLIC
        return cls.PRIVATE
