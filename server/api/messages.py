# server/api/messages.py

from pydantic import BaseModel
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from database import get_db
from api.auth import get_current_user
from core.errors import NotFound, ValidationError
from core.messages import create_message, get_message, list_messages


router = APIRouter(prefix="/api/messages")


class MessageRequest(BaseModel):
    """
    Contact form submission. Fields are optional here so that a missing
    field gets the same 400 answer as an empty one.
    """
    name: str | None = None
    email: str | None = None
    message: str | None = None


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_message(req: MessageRequest, db: Session = Depends(get_db)):
    if not req.name or not req.email or not req.message:
        raise ValidationError("All fields are required.")

    msg = create_message(db, req.name, req.email, req.message)
    return {"message": "Message sent successfully.", "data": msg.to_dict()}


@router.get("", dependencies=[Depends(get_current_user)])
def read_messages(db: Session = Depends(get_db)):
    return [m.to_dict() for m in list_messages(db)]


@router.get("/{message_id}")
def read_message(message_id: str, db: Session = Depends(get_db)):
    msg = get_message(db, message_id)
    if msg is None:
        raise NotFound("Message not found.")
    return msg.to_dict()
