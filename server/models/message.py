# server/models/message.py

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime
from . import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def _created_at_utc(self) -> datetime:
        # SQLite hands the column back naive; the stored value is UTC.
        if self.created_at.tzinfo is None:
            return self.created_at.replace(tzinfo=timezone.utc)
        return self.created_at

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "createdAt": self._created_at_utc().isoformat() if self.created_at else None,
        }
