# ---------- routes/auth_routes.py ----------
"""
User service routes: registration, login and the current-user lookup.
"""
from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

import config
from auth import create_token, bearer_token
from database import get_db
from errors import NoSessionError
from services.user_service import UserService, serialize_user

router = APIRouter(tags=["Users"])


# ── Pydantic schemas ──────────────────────────────────────────────
class RegisterRequest(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


# ── Routes ────────────────────────────────────────────────────────
@router.post("/register", status_code=201)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account. Username and email must be unique."""
    UserService.register(db, body.username, body.email, body.password)
    return {"message": "Registration successful"}


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate with username + password; returns the user and a bearer token."""
    user = UserService.authenticate(db, body.username, body.password)
    token = create_token(user.id, user.username)
    return {
        "message": "Login successful",
        "user": serialize_user(user),
        "token": token,
    }


@router.get("/me")
def me(request: Request, db: Session = Depends(get_db)):
    """Who is calling: the bearer token's user, or the last login in legacy mode."""
    token = bearer_token(request)
    if token:
        user = UserService.resolve_token(db, token)
    elif config.SESSION_MODE == "last_login":
        user = UserService.current_user(db)
    else:
        raise NoSessionError("No user is currently logged in")
    return serialize_user(user)
