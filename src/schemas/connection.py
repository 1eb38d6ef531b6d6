# src/schemas/connection.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class ConnectionPair(BaseModel):
    """
    Тело запросов request/accept/reject: { "from": <uid>, "to": <uid> }.
    Поля необязательные — отсутствие проверяется в роутере (ответ 400, а не 422).
    """
    from_uid: Optional[str] = Field(None, alias="from")
    to_uid: Optional[str] = Field(None, alias="to")

    class Config:
        populate_by_name = True


class ConnectionRequestOut(BaseModel):
    id: int
    from_uid: str = Field(..., alias="from")
    to_uid: str = Field(..., alias="to")
    created_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ConnectionOut(BaseModel):
    """
    Принятая связь. fromUid/toUid — в том порядке, в котором шла заявка;
    для «моих связей» uid может стоять на любой из позиций.
    """
    id: int
    from_uid: str
    to_uid: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
