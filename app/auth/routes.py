
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from app.auth.deps import COOKIE_NAME, get_db, get_current_user
from app.config import settings
from app.models.user import User
from app.schemas.auth import RegisterIn, LoginIn, TokenOut, MeOut
from app.auth.service import register_user, login_user

router = APIRouter(prefix="/auth", tags=["auth"])

def set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="Lax",
        secure=settings.app_env != "dev",
        path="/",
        max_age=settings.access_token_expire_minutes * 60,
    )

@router.post("/register", response_model=TokenOut)
def register(body: RegisterIn, response: Response, db: Session = Depends(get_db)):
    user = register_user(db, body.name, body.email, body.password)
    token = login_user(db, user.email, body.password)
    set_auth_cookie(response, token)
    return TokenOut(access_token=token)

@router.post("/login", response_model=TokenOut)
def login(body: LoginIn, response: Response, db: Session = Depends(get_db)):
    token = login_user(db, body.email, body.password)
    set_auth_cookie(response, token)
    return TokenOut(access_token=token)

@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(COOKIE_NAME, path="/")
    return {"ok": True}

@router.get("/me", response_model=MeOut)
def me(user: User = Depends(get_current_user)):
    return user
