# src/models/connection.py
from sqlalchemy import (
    Column, Integer, String, DateTime,
    UniqueConstraint, Index, CheckConstraint, func
)
from src.db import Base
from src.utils.clock import utc_now


class Connection(Base):
    """
    Принятая связь между двумя пользователями (неориентированная).
    from_uid/to_uid — пара в том порядке, в котором шла заявка.
    user_min/user_max — каноническая пара (user_min < user_max): одна строка на пару,
    повторное принятие в обратную сторону дубль не создаст.
    """
    __tablename__ = "connections"

    id = Column(Integer, primary_key=True, index=True)

    from_uid = Column(String(128), nullable=False)
    to_uid = Column(String(128), nullable=False)

    user_min = Column(String(128), nullable=False)
    user_max = Column(String(128), nullable=False)

    created_at = Column(DateTime, nullable=False, default=utc_now, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, default=utc_now, server_default=func.now(), onupdate=utc_now)

    __table_args__ = (
        UniqueConstraint("user_min", "user_max", name="uq_connection_pair"),
        CheckConstraint("user_min < user_max", name="ck_connection_min_lt_max"),
        Index("ix_connections_from_uid", "from_uid"),
        Index("ix_connections_to_uid", "to_uid"),
    )

    def __repr__(self):
        return f"<Connection(from_uid={self.from_uid}, to_uid={self.to_uid})>"
