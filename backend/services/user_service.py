"""
user_service.py - User directory & session lookup
Registration, credential checks, last-login tracking and identity resolution.
"""

import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from auth import hash_password, verify_password, verify_token
from database import utcnow
from errors import ValidationError, ConflictError, NotFoundError, AuthError, NoSessionError
from models.user import User

logger = logging.getLogger(__name__)


def serialize_user(u: User) -> dict:
    return {"id": u.id, "username": u.username, "email": u.email}


class UserService:

    @staticmethod
    def register(db: Session, username: str, email: str, password: str) -> User:
        for field, value in (("Username", username), ("Email", email), ("Password", password)):
            if not value:
                raise ValidationError(f"{field} is required")

        user = User(
            username=username,
            email=email,
            hashed_password=hash_password(password),
        )
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError:
            db.rollback()
            raise ConflictError("Username or email already exists")
        except SQLAlchemyError:
            db.rollback()
            raise

        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    @staticmethod
    def get_by_username(db: Session, username: str) -> User:
        user = db.query(User).filter(User.username == username).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def get_by_id(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> User:
        """Exact credential match; stamps last_login on success."""
        user = UserService.get_by_username(db, username)
        if not verify_password(password or "", user.hashed_password):
            logger.info(f"Failed login for {username}")
            raise AuthError("Invalid password")

        try:
            user.last_login = utcnow()
            db.commit()
            db.refresh(user)
        except SQLAlchemyError:
            db.rollback()
            raise

        logger.info(f"User {user.id} logged in")
        return user

    @staticmethod
    def current_user(db: Session) -> User:
        """The most recently logged in user across all accounts."""
        user = (
            db.query(User)
            .filter(User.last_login.isnot(None))
            .order_by(User.last_login.desc(), User.id.desc())
            .first()
        )
        if not user:
            raise NoSessionError("No user is currently logged in")
        return user

    @staticmethod
    def resolve_token(db: Session, token: str) -> User:
        payload = verify_token(token)
        if payload is None or payload.get("user_id") is None:
            raise AuthError("Invalid or expired token")
        try:
            return UserService.get_by_id(db, int(payload["user_id"]))
        except NotFoundError:
            raise AuthError("User no longer exists")
