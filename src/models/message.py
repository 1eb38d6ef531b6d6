# src/models/message.py
from sqlalchemy import Column, Integer, String, Text, DateTime, Index, func
from src.db import Base
from src.utils.clock import utc_now

class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)

    # отправитель и получатель (uid из Firebase)
    from_uid = Column(String(128), nullable=False)
    to_uid = Column(String(128), nullable=False)

    text = Column(Text, nullable=False)

    # каждое сообщение живёт сутки от своего created_at
    created_at = Column(DateTime, nullable=False, default=utc_now, server_default=func.now())

    __table_args__ = (
        Index("ix_messages_pair", "from_uid", "to_uid"),
        Index("ix_messages_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Message id={self.id} from={self.from_uid} to={self.to_uid}>"
