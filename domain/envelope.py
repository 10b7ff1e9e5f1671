"""
Response envelopes. Every response body carries ``success`` and ``message``;
successful post and comment responses add a ``post`` or ``comment`` payload.
"""
from pydantic import BaseModel
from typing import List

from domain.comments import Comment
from domain.posts import Post


class Envelope(BaseModel):
    success: bool = True
    message: str


class PostEnvelope(Envelope):
    post: Post


class PostListEnvelope(Envelope):
    post: List[Post]


class CommentEnvelope(Envelope):
    comment: Comment


def error_body(message: str) -> dict:
    return Envelope(success=False, message=message).model_dump()
