"""Proof attachments: upload grants, attaching uploaded objects, public download links.

A proof goes Requested -> Uploaded -> Attached. Only the last state is stored;
the first two exist only as a grant held by the client. Content type and size
are whatever the client declared and are not checked against the stored object.
"""

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from prooflog.config import Settings
from prooflog.models.entry import Entry
from prooflog.schemas.proof import ProofAttach
from prooflog.schemas.public import ProofLink
from prooflog.services.entries import parse_entry_id
from prooflog.services.errors import NotFound, ValidationError
from prooflog.services.storage import ProofStorage

logger = logging.getLogger(__name__)

PROOF_ROOT = "proofs/"
MAX_IMAGE_BYTES = 10 * 1024 * 1024  # 10 MiB
MAX_PDF_BYTES = 25 * 1024 * 1024  # 25 MiB
MAX_FILENAME_LENGTH = 120
DEFAULT_CONTENT_TYPE = "application/octet-stream"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(name: str) -> str:
    """Replace anything outside ``[A-Za-z0-9._-]`` with ``_``."""
    return _UNSAFE_FILENAME_CHARS.sub("_", name.strip())[:MAX_FILENAME_LENGTH] or "file"


def proof_prefix(owner_id: str, entry_id: str) -> str:
    return f"{PROOF_ROOT}{owner_id}/{entry_id}/"


def build_proof_key(
    owner_id: str, entry_id: str, filename: str, now: datetime | None = None
) -> str:
    """Storage key ``proofs/{owner}/{entry}/{epoch millis}-{safe name}``."""
    now = now or datetime.now(UTC)
    millis = int(now.timestamp() * 1000)
    return f"{proof_prefix(owner_id, entry_id)}{millis}-{sanitize_filename(filename)}"


def check_declared_file(content_type: str, size: int) -> None:
    """Validate the client's declared content type and size."""
    is_image = content_type.startswith("image/")
    is_pdf = content_type == "application/pdf"
    if not is_image and not is_pdf:
        raise ValidationError("Only images and PDFs allowed")
    if size <= 0:
        raise ValidationError("size must be a positive number of bytes")
    if is_image and size > MAX_IMAGE_BYTES:
        raise ValidationError("Image too large (max 10MB)")
    if is_pdf and size > MAX_PDF_BYTES:
        raise ValidationError("PDF too large (max 25MB)")


@dataclass(frozen=True)
class UploadGrant:
    upload_url: str
    key: str
    expires_in: int


class ProofService:
    """Service for proof upload grants and download links."""

    def __init__(self, db: Session, storage: ProofStorage, settings: Settings):
        self.db = db
        self.storage = storage
        self.settings = settings

    def _owned_entry(self, owner_id: str, entry_id: str, for_update: bool = False) -> Entry:
        q = self.db.query(Entry).filter(Entry.id == entry_id, Entry.owner_id == owner_id)
        if for_update:
            q = q.with_for_update()
        entry = q.first()
        if entry is None:
            raise NotFound("Entry not found")
        return entry

    def request_upload(
        self,
        owner_id: str,
        entry_id: str,
        filename: str,
        content_type: str,
        size: int,
    ) -> UploadGrant:
        """Issue a short-lived PUT URL for a new proof of one of the caller's entries."""
        entry_id = parse_entry_id(entry_id)
        check_declared_file(content_type, size)
        self._owned_entry(owner_id, entry_id)

        key = build_proof_key(owner_id, entry_id, filename)
        expires_in = self.settings.upload_url_expiration_seconds
        upload_url = self.storage.presign_upload(key, content_type, expires_in)
        logger.info(f"Issued upload grant for {key} ({content_type}, {size} bytes)")
        return UploadGrant(upload_url=upload_url, key=key, expires_in=expires_in)

    def attach(self, owner_id: str, entry_id: str, attachment: ProofAttach) -> Entry:
        """Record an uploaded object on the caller's entry."""
        entry_id = parse_entry_id(entry_id)
        entry = self._owned_entry(owner_id, entry_id, for_update=True)

        if not attachment.key.startswith(proof_prefix(owner_id, entry_id)):
            self.db.rollback()
            raise ValidationError("Proof key does not belong to this entry")

        proof = {
            "key": attachment.key,
            "original_name": attachment.original_name,
            "content_type": attachment.content_type,
            "size": attachment.size,
            "uploaded_at": datetime.now(UTC).isoformat(),
        }
        # Reassign so the JSON column is flagged as modified
        entry.proofs = [*(entry.proofs or []), proof]
        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"Attached proof {attachment.key} to entry {entry_id}")
        return entry

    def presign_public_proofs(self, entry: Entry) -> list[ProofLink]:
        """Download links for a public entry's proofs.

        Each URL stops working after the download window; callers must not cache
        them past it.
        """
        if not entry.is_public:
            raise NotFound("Public entry not found")

        expires_in = self.settings.download_url_expiration_seconds
        links = []
        for proof in entry.proofs or []:
            key = proof.get("key")
            if not key:
                continue
            links.append(
                ProofLink(
                    key=key,
                    url=self.storage.presign_download(key, expires_in),
                    original_name=proof.get("original_name") or key.rsplit("/", 1)[-1],
                    content_type=proof.get("content_type") or DEFAULT_CONTENT_TYPE,
                    size=proof.get("size") or 0,
                    uploaded_at=proof.get("uploaded_at"),
                )
            )
        return links

    def find_orphaned_keys(self, older_than: timedelta | None = None) -> list[str]:
        """Stored objects that no entry references.

        Objects younger than ``older_than`` are left alone since their upload may
        still be on its way to being attached.
        """
        if older_than is None:
            older_than = timedelta(minutes=self.settings.orphan_grace_period_minutes)
        cutoff = datetime.now(UTC) - older_than

        attached: set[str] = set()
        for (proofs,) in self.db.query(Entry.proofs).all():
            attached.update(p["key"] for p in proofs or [] if p.get("key"))

        orphans = [
            key
            for key, last_modified in self.storage.iter_objects(PROOF_ROOT)
            if key not in attached and last_modified < cutoff
        ]
        logger.info(f"Found {len(orphans)} orphaned proof objects")
        return orphans
