# server/core/messages.py

from sqlalchemy.orm import Session
from models.message import Message


MAX_MESSAGE_ID = 2 ** 63 - 1


def parse_message_id(raw_id) -> int | None:
    """Path ids are plain positive integers; anything else cannot match a row."""
    if isinstance(raw_id, int) and not isinstance(raw_id, bool):
        return raw_id if 0 < raw_id <= MAX_MESSAGE_ID else None
    if not isinstance(raw_id, str) or not raw_id.isascii() or not raw_id.isdigit():
        return None
    value = int(raw_id)
    return value if 0 < value <= MAX_MESSAGE_ID else None


def create_message(db: Session, name: str, email: str, message: str) -> Message:
    msg = Message(name=name, email=email, message=message)
    db.add(msg)
    db.commit()
    db.refresh(msg)
    return msg


def list_messages(db: Session) -> list[Message]:
    return db.query(Message).order_by(Message.id.asc()).all()


def get_message(db: Session, message_id) -> Message | None:
    parsed = parse_message_id(message_id)
    if parsed is None:
        return None
    return db.get(Message, parsed)
