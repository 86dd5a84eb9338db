
from fastapi import Request, Depends
from sqlalchemy.orm import Session
from jose import JWTError
from app.db.session import SessionLocal
from app.errors import NotAuthenticatedError
from app.utils.security import decode_token
from app.models.user import User

COOKIE_NAME = "ar_jwt"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth.split(" ", 1)[1].strip()
    return request.cookies.get(COOKIE_NAME)

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = get_token(request)
    if not token:
        raise NotAuthenticatedError("Not authenticated")

    try:
        payload = decode_token(token)
        user_id: str = payload.get("sub")
        if user_id is None:
            raise NotAuthenticatedError("Invalid token")
    except JWTError:
        raise NotAuthenticatedError("Invalid token")

    user = db.get(User, int(user_id))
    if user is None:
        raise NotAuthenticatedError("User not found")

    return user
