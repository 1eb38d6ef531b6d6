# src/models/user.py

from sqlalchemy import Column, String, Boolean, DateTime, JSON, false, func
from src.db import Base
from src.utils.clock import utc_now


class User(Base):
    """
    Профиль студента. Первичный ключ — uid из Firebase,
    поэтому запись всегда однозначно привязана к аккаунту провайдера.
    """
    __tablename__ = "users"

    uid = Column(String(128), primary_key=True, index=True)
    name = Column(String, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)

    bio = Column(String, nullable=True)
    branch = Column(String, nullable=True)
    year = Column(String, nullable=True)
    college = Column(String, nullable=True)
    city = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    github_url = Column(String, nullable=True)
    portfolio_url = Column(String, nullable=True)
    profile_picture = Column(String, nullable=True)
    career_goals = Column(String, nullable=True)
    date_of_birth = Column(String, nullable=True)

    # Списки строк (навыки, интересы, ссылки на файлы)
    skills = Column(JSON, nullable=False, default=list)
    interests = Column(JSON, nullable=False, default=list)
    resume_files = Column(JSON, nullable=False, default=list)
    project_files = Column(JSON, nullable=False, default=list)
    certification_files = Column(JSON, nullable=False, default=list)

    is_online = Column(Boolean, nullable=True)
    completed_profile = Column(Boolean, nullable=False, default=False, server_default=false())

    created_at = Column(DateTime, nullable=False, default=utc_now, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, default=utc_now, server_default=func.now(), onupdate=utc_now)

    def __repr__(self):
        return f"<User(uid={self.uid}, name={self.name}, completed_profile={self.completed_profile})>"
