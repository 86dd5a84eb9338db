
import enum
from sqlalchemy import CheckConstraint, Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.document import utcnow

class ChangeType(str, enum.Enum):
    created = "created"
    title_updated = "title_updated"
    content_modified = "content_modified"
    restored = "restored"

class DocumentVersion(Base):
    """Immutable snapshot of a document's title and content."""

    __tablename__ = "document_versions"
    __table_args__ = (
        CheckConstraint(
            "change_type IN ('created', 'title_updated', 'content_modified', 'restored')",
            name="ck_document_versions_change_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(
        Integer,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    change_type = Column(String(32), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    document = relationship("Document", back_populates="versions")

Index("idx_document_versions_created_at", DocumentVersion.created_at.desc())
