from pydantic import BaseModel, Field
from typing import Optional
import datetime
import uuid


class CommentIn(BaseModel):
    userId: str
    comment: Optional[str] = None


class Comment(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    createdAt: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(datetime.timezone.utc))
    author: str # userId of the commenter
    comment: Optional[str] = None

    class Config:
        from_attributes = True
