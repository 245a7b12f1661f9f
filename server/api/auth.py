# server/api/auth.py

import logging
from pydantic import BaseModel
from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy.orm import Session
from database import get_db
from core.errors import Conflict, Unauthorized, ValidationError
from core.security import TokenClaims, TokenService, get_password_hash
from core.users import create_user, find_user_by_username, verify_password


logger = logging.getLogger(__name__)

router = APIRouter()


class Credentials(BaseModel):
    username: str | None = None
    password: str | None = None


# -------------------------------
# Auth Gate
# -------------------------------

def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user(
    request: Request,
    authorization: str | None = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Admit the request only with 'Authorization: Bearer <token>' carrying a
    valid, unexpired token. The decoded identity is also left on request.state.user.
    """
    parts = (authorization or "").split(" ")
    token = parts[1] if len(parts) > 1 else None
    if not token:
        raise Unauthorized("No token provided")

    if parts[0].lower() != "bearer":
        raise Unauthorized("Invalid token")

    claims = tokens.verify(token)
    if claims is None:
        raise Unauthorized("Invalid token")

    request.state.user = claims
    return claims


# -------------------------------
# Registration & Login
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: Credentials, db: Session = Depends(get_db)):
    if not body.username or not body.password:
        raise ValidationError("Username and password are required.")

    if find_user_by_username(db, body.username):
        logger.info("Registration refused, username taken: %s", body.username)
        raise Conflict("Username already exists")

    create_user(db, body.username, get_password_hash(body.password))
    logger.info("Registered user %s", body.username)
    return {"message": "User registered successfully"}


@router.post("/login")
def login(
    body: Credentials,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user = find_user_by_username(db, body.username) if body.username else None
    if not user or not verify_password(user, body.password):
        logger.warning("Failed login for %s", body.username)
        raise Unauthorized("Invalid username or password")

    token = tokens.issue(user.id, user.username)
    return {"message": "Login successful", "token": token}


@router.get("/protected")
def protected(current_user: TokenClaims = Depends(get_current_user)):
    return {"message": "You have access to this route", "user": current_user.to_dict()}
