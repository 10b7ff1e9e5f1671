from pydantic import BaseModel, Field
from typing import List, Optional
import datetime
import uuid

from domain.comments import Comment

# Content fields a post's owner (or an admin) may overwrite
CONTENT_FIELDS = ("title", "description", "image", "lectureURL")


class PostFields(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    lectureURL: Optional[str] = None


class Post(PostFields):
    postId: str = Field(default_factory=lambda: str(uuid.uuid4()))
    createdAt: datetime.datetime = Field(default_factory=lambda: datetime.datetime.now(datetime.timezone.utc))
    postedBy: str
    comments: List[Comment] = Field(default_factory=list)

    class Config:
        from_attributes = True
