from datetime import datetime

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.documents.service import get_document
from app.errors import StorageError
from app.models.document import Document, utcnow
from app.models.document_version import ChangeType, DocumentVersion
from app.models.user import User
from app.versioning.store import VersionStore


def restore(db: Session, document_id: int, version_id: int, user: User, now: datetime | None = None) -> Document:
    """Copy a past version back onto the live document and log a ``restored`` version.

    The ``restored`` snapshot is appended even when the document already
    matches the version, so every restore is auditable.
    """
    doc = get_document(db, user, document_id)
    store = VersionStore(db)
    target = store.get_by_id(version_id, document_id=doc.id)
    now = now or utcnow()

    try:
        doc.title = target.title
        doc.content = target.content
        doc.updated_at = now
        store.append(DocumentVersion(
            document_id=doc.id,
            title=target.title,
            content=target.content,
            change_type=ChangeType.restored.value,
            user_id=user.id,
            created_at=now,
        ))
        db.commit()
    except StorageError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("restore of document {} to version {} failed: {}", document_id, version_id, e)
        raise StorageError("Failed to restore version", document_id=document_id, version_id=version_id) from e

    db.refresh(doc)
    logger.info("document {} restored to version {} by user {}", doc.id, version_id, user.id)
    return doc
