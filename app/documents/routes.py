
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from app.auth.deps import get_db, get_current_user
from app.documents import service
from app.models.user import User
from app.schemas.document import DocumentCreate, DocumentUpdate, DocumentOut

router = APIRouter(prefix="/documents", tags=["documents"])

@router.get("", response_model=list[DocumentOut])
def list_documents(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return service.list_documents(db, user)

@router.post("", response_model=DocumentOut, status_code=201)
def create_document(body: DocumentCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return service.create_document(db, user, body.title, body.content)

@router.get("/{doc_id}", response_model=DocumentOut)
def get_document(doc_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return service.get_document(db, user, doc_id)

@router.put("/{doc_id}", response_model=DocumentOut)
def update_document(doc_id: int, body: DocumentUpdate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return service.update_document(db, user, doc_id, title=body.title, content=body.content)

@router.delete("/{doc_id}", status_code=204)
def delete_document(doc_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    service.delete_document(db, user, doc_id)
    return Response(status_code=204)
