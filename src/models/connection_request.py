# src/models/connection_request.py

from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint, Index, func
from src.db import Base
from src.utils.clock import utc_now


class ConnectionRequest(Base):
    """
    Заявка в друзья from_uid -> to_uid.
    Живёт сутки с момента создания (RECORD_TTL): чтения игнорируют протухшие строки,
    фоновая задача src.jobs.expire_records их физически удаляет.
    На одну упорядоченную пару — не больше одной строки.
    """
    __tablename__ = "connection_requests"

    id = Column(Integer, primary_key=True, index=True)
    from_uid = Column(String(128), nullable=False)
    to_uid = Column(String(128), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utc_now, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("from_uid", "to_uid", name="uq_connection_request_pair"),
        Index("ix_connection_requests_to_uid", "to_uid"),
        Index("ix_connection_requests_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<ConnectionRequest(id={self.id}, from_uid={self.from_uid}, to_uid={self.to_uid})>"
