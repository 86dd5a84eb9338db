from dataclasses import dataclass

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import NotFoundError, StorageError
from app.models.document_version import DocumentVersion
from app.versioning.identity import UNKNOWN_USER, EmailLookup


@dataclass
class VersionEntry:
    """A stored version paired with the display email of its author."""

    version: DocumentVersion
    user_email: str


class VersionStore:
    """Append-only access to the document_versions table."""

    def __init__(self, db: Session, emails: EmailLookup | None = None):
        self.db = db
        self.emails = emails

    def append(self, version: DocumentVersion) -> DocumentVersion:
        try:
            self.db.add(version)
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error("failed to append version for document {}: {}", version.document_id, e)
            raise StorageError("Failed to record document version", document_id=version.document_id) from e
        return version

    def list_by_document(self, document_id: int) -> list[VersionEntry]:
        stmt = (
            select(DocumentVersion)
            .where(DocumentVersion.document_id == document_id)
            .order_by(DocumentVersion.created_at.desc(), DocumentVersion.id.desc())
        )
        try:
            versions = self.db.scalars(stmt).all()
        except SQLAlchemyError as e:
            logger.error("failed to list versions for document {}: {}", document_id, e)
            raise StorageError("Failed to fetch version history", document_id=document_id) from e
        return [VersionEntry(version=v, user_email=self.user_email(v.user_id)) for v in versions]

    def get_by_id(self, version_id: int, document_id: int | None = None) -> DocumentVersion:
        try:
            version = self.db.get(DocumentVersion, version_id)
        except SQLAlchemyError as e:
            raise StorageError("Failed to fetch version", version_id=version_id) from e
        if version is None or (document_id is not None and version.document_id != document_id):
            raise NotFoundError("Version not found", version_id=version_id)
        return version

    def user_email(self, user_id: int | None) -> str:
        if self.emails is None:
            return UNKNOWN_USER
        try:
            email = self.emails.email_for(user_id)
        except Exception as e:
            logger.warning("email lookup failed for user {}: {}", user_id, e)
            return UNKNOWN_USER
        return email or UNKNOWN_USER
