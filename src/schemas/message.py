# src/schemas/message.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

class MessageIn(BaseModel):
    from_uid: Optional[str] = Field(None, alias="from")
    to_uid: Optional[str] = Field(None, alias="to")
    text: Optional[str] = None

    class Config:
        populate_by_name = True

class MessageOut(BaseModel):
    id: int
    from_uid: str = Field(..., alias="from")
    to_uid: str = Field(..., alias="to")
    text: str
    created_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
