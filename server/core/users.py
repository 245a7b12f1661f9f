# server/core/users.py

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.errors import Conflict
from core.security import verify_password_hash
from models.user import User


logger = logging.getLogger(__name__)


def find_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password_hash: str) -> User:
    """
    Insert a user row. Two concurrent registrations can both pass the
    caller's existence check; the unique index rejects the second insert,
    which is reported as a Conflict.
    """
    user = User(username=username, hashed_password=password_hash)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Rejected duplicate username at insert: %s", username)
        raise Conflict("Username already exists")
    db.refresh(user)
    return user


def verify_password(user: User, candidate) -> bool:
    return verify_password_hash(candidate, user.hashed_password)
