
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth.deps import get_db, get_current_user
from app.documents.service import get_document
from app.models.user import User
from app.schemas.document import DocumentOut
from app.schemas.version import DayGroupOut, VersionOut
from app.versioning import presenter
from app.versioning.identity import UserTableEmailLookup
from app.versioning.restorer import restore
from app.versioning.store import VersionEntry, VersionStore

router = APIRouter(prefix="/documents/{doc_id}/versions", tags=["versions"])

def _store(db: Session) -> VersionStore:
    return VersionStore(db, emails=UserTableEmailLookup(db))

def _out(entry: VersionEntry, now: datetime) -> VersionOut:
    v = entry.version
    return VersionOut(
        id=v.id,
        document_id=v.document_id,
        title=v.title,
        content=v.content or "",
        change_type=v.change_type,
        user_id=v.user_id,
        user_email=entry.user_email,
        created_at=presenter.as_utc(v.created_at),
        change_description=presenter.change_description(v.change_type),
        relative_time=presenter.format_relative_time(v.created_at, now),
        absolute_time=presenter.format_absolute_time(v.created_at),
        preview=presenter.text_preview(v.content),
    )

@router.get("", response_model=list[VersionOut])
def list_versions(doc_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    doc = get_document(db, user, doc_id)
    now = datetime.now(timezone.utc)
    return [_out(e, now) for e in _store(db).list_by_document(doc.id)]

@router.get("/grouped", response_model=list[DayGroupOut])
def list_versions_grouped(doc_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    doc = get_document(db, user, doc_id)
    now = datetime.now(timezone.utc)
    groups = presenter.group_by_day(
        _store(db).list_by_document(doc.id), now, timestamp=lambda e: e.version.created_at
    )
    return [
        DayGroupOut(day=g.key, label=g.label, versions=[_out(e, now) for e in g.items])
        for g in groups
    ]

@router.get("/{version_id}", response_model=VersionOut)
def get_version(doc_id: int, version_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    doc = get_document(db, user, doc_id)
    store = _store(db)
    version = store.get_by_id(version_id, document_id=doc.id)
    entry = VersionEntry(version=version, user_email=store.user_email(version.user_id))
    return _out(entry, datetime.now(timezone.utc))

@router.post("/{version_id}/restore", response_model=DocumentOut)
def restore_version(doc_id: int, version_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return restore(db, doc_id, version_id, user)
