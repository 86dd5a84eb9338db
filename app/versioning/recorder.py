"""Decides when a document write produces a new version snapshot."""

from dataclasses import dataclass
from datetime import datetime

from loguru import logger
from sqlalchemy.orm import Session

from app.models.document import Document, utcnow
from app.models.document_version import ChangeType, DocumentVersion
from app.versioning.store import VersionStore


@dataclass(frozen=True)
class Snapshot:
    title: str
    content: str

    @classmethod
    def of(cls, document: Document) -> "Snapshot":
        return cls(title=document.title, content=document.content or "")


def classify_change(previous: Snapshot | None, incoming: Snapshot, is_first_write: bool) -> ChangeType | None:
    """Return the change classification for a write, or None when nothing changed.

    A simultaneous title and content change is reported as a content edit.
    ``restored`` is never produced here; only the restore operation uses it.
    """
    if is_first_write or previous is None:
        return ChangeType.created
    title_changed = previous.title != incoming.title
    content_changed = previous.content != incoming.content
    if title_changed and content_changed:
        return ChangeType.content_modified
    if title_changed:
        return ChangeType.title_updated
    if content_changed:
        return ChangeType.content_modified
    return None


def record_change(
    db: Session,
    document: Document,
    previous: Snapshot | None,
    user_id: int | None,
    *,
    is_first_write: bool = False,
    now: datetime | None = None,
) -> DocumentVersion | None:
    """Append a version for ``document``'s current state if the write warrants one.

    Runs inside the caller's transaction; ``previous`` must be the state read
    before the document was mutated.
    """
    incoming = Snapshot.of(document)
    change = classify_change(previous, incoming, is_first_write)
    if change is None:
        logger.debug("document {} unchanged, no version recorded", document.id)
        return None

    version = DocumentVersion(
        document_id=document.id,
        title=incoming.title,
        content=incoming.content,
        change_type=change.value,
        user_id=user_id,
        created_at=now or utcnow(),
    )
    VersionStore(db).append(version)
    logger.debug("document {} recorded version {} ({})", document.id, version.id, change.value)
    return version
