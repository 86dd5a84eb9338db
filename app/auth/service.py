
from loguru import logger
from sqlalchemy.orm import Session
from app.errors import NotAuthenticatedError, ValidationError
from app.models.user import User
from app.utils.security import hash_password, verify_password, create_access_token

def register_user(db: Session, name: str, email: str, password: str) -> User:
    if db.query(User).filter(User.email == email).first():
        raise ValidationError("Email already registered", email=email)
    user = User(name=name, email=email, password_hash=hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("registered user {}", user.id)
    return user

def login_user(db: Session, email: str, password: str) -> str:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        raise NotAuthenticatedError("Invalid credentials")
    return create_access_token(str(user.id))
