# src/schemas/user.py
# Наружу поля отдаются в camelCase (как ждёт фронт), внутри — snake_case.

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime


class UserCreate(BaseModel):
    """Тело POST /api/user — то, что фронт шлёт при входе через Firebase."""
    uid: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")

    class Config:
        populate_by_name = True


class ProfileUpdate(BaseModel):
    """
    Частичное обновление профиля. Учитываются только переданные поля (exclude_unset).
    uid/_id сюда не входят: ключ записи всегда берётся из пути.
    Неизвестные поля молча отбрасываются.
    """
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    bio: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None
    college: Optional[str] = None
    city: Optional[str] = None
    phone_number: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    profile_picture: Optional[str] = None
    career_goals: Optional[str] = None
    date_of_birth: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    resume_files: Optional[List[str]] = None
    project_files: Optional[List[str]] = None
    certification_files: Optional[List[str]] = None
    is_online: Optional[bool] = None
    completed_profile: Optional[bool] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"


class UserOut(BaseModel):
    uid: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    bio: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None
    college: Optional[str] = None
    city: Optional[str] = None
    phone_number: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    profile_picture: Optional[str] = None
    career_goals: Optional[str] = None
    date_of_birth: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    resume_files: List[str] = []
    project_files: List[str] = []
    certification_files: List[str] = []
    is_online: Optional[bool] = None
    completed_profile: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class UserSummaryOut(BaseModel):
    """Короткая карточка для общего списка пользователей (GET /api/users)."""
    uid: str
    first_name: Optional[str] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    college: Optional[str] = None
    year: Optional[str] = None
    branch: Optional[str] = None
    city: Optional[str] = None
    is_online: Optional[bool] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
