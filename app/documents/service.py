from datetime import datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import NotFoundError, StorageError, ValidationError
from app.models.document import Document, utcnow
from app.models.user import User
from app.versioning.recorder import Snapshot, record_change


def _commit(db: Session, action: str, **context) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("failed to {} ({}): {}", action, context, e)
        raise StorageError(f"Failed to {action}", **context) from e


def create_document(db: Session, user: User, title: str, content: str = "", now: datetime | None = None) -> Document:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Document title must not be empty")
    now = now or utcnow()
    doc = Document(user_id=user.id, title=title, content=content or "", created_at=now, updated_at=now)
    db.add(doc)
    try:
        db.flush()
        record_change(db, doc, None, user.id, is_first_write=True, now=now)
    except StorageError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Failed to create document") from e
    _commit(db, "create document")
    db.refresh(doc)
    logger.info("user {} created document {}", user.id, doc.id)
    return doc


def list_documents(db: Session, user: User) -> list[Document]:
    stmt = (
        select(Document)
        .where(Document.user_id == user.id)
        .order_by(Document.updated_at.desc(), Document.id.desc())
    )
    try:
        return list(db.scalars(stmt).all())
    except SQLAlchemyError as e:
        raise StorageError("Failed to fetch documents") from e


def get_document(db: Session, user: User, document_id: int, *, for_update: bool = False) -> Document:
    stmt = select(Document).where(Document.id == document_id, Document.user_id == user.id)
    if for_update:
        stmt = stmt.with_for_update()
    try:
        doc = db.scalars(stmt).first()
    except SQLAlchemyError as e:
        raise StorageError("Failed to fetch document", document_id=document_id) from e
    if doc is None:
        raise NotFoundError("Document not found", document_id=document_id)
    return doc


def update_document(
    db: Session,
    user: User,
    document_id: int,
    title: str | None = None,
    content: str | None = None,
    now: datetime | None = None,
) -> Document:
    """Apply a partial update and record a version in the same transaction."""
    doc = get_document(db, user, document_id, for_update=True)
    previous = Snapshot.of(doc)

    if title is not None:
        doc.title = title
    if content is not None:
        doc.content = content

    now = now or utcnow()
    try:
        version = record_change(db, doc, previous, user.id, now=now)
        if version is not None:
            doc.updated_at = now
    except StorageError:
        db.rollback()
        raise
    _commit(db, "save document", document_id=document_id)
    db.refresh(doc)
    return doc


def delete_document(db: Session, user: User, document_id: int) -> None:
    doc = get_document(db, user, document_id)
    db.delete(doc)
    _commit(db, "delete document", document_id=document_id)
    logger.info("user {} deleted document {}", user.id, document_id)
