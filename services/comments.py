import logging
from typing import Optional

from domain.comments import Comment
from domain.user import Identity
from services import authorization
from services.errors import Forbidden, NotFound
from services.post_store import PostStore

logger = logging.getLogger('uvicorn.error')


def find_comment_position(comments: list, comment_id: str) -> int:
    """Index of the first comment with ``comment_id``, or -1."""
    for position, comment in enumerate(comments):
        if comment.get("id") == comment_id:
            return position
    return -1


async def add_comment(store: PostStore, post_id: str, author_id: str, text: Optional[str]) -> Comment:
    post_data = await store.get(post_id)
    if post_data is None:
        logger.warning(f"Attempt to comment on non-existent post '{post_id}' by '{author_id}'")
        raise NotFound("Post not found")

    new_comment = Comment(author=author_id, comment=text)
    # Fetch-then-replace of the whole list: a concurrent writer can be overwritten.
    comments = post_data.get("comments") or []
    await store.update(post_id, {"comments": [*comments, new_comment.model_dump()]})
    logger.info(f"User '{author_id}' added comment '{new_comment.id}' on post '{post_id}'")
    return new_comment


async def delete_comment(store: PostStore, post_id: str, comment_id: str, identity: Identity) -> None:
    post_data = await store.get(post_id)
    if post_data is None:
        logger.warning(f"Attempt to delete comment '{comment_id}' from non-existent post '{post_id}'")
        raise NotFound("Post not found")

    comments = post_data.get("comments") or []
    position = find_comment_position(comments, comment_id)
    if position == -1:
        logger.warning(f"Comment '{comment_id}' not found in post '{post_id}'")
        raise NotFound("Comment not found")

    if not authorization.can_delete_comment(identity, post_data, comments[position]):
        logger.warning(f"Forbidden: User '{identity.username}' attempted to delete comment '{comment_id}' on post '{post_id}'.")
        raise Forbidden("Unauthorized to delete this comment")

    remaining = [comment for index, comment in enumerate(comments) if index != position]
    await store.update(post_id, {"comments": remaining})
    logger.info(f"Comment deleted on '{post_id}' by '{identity.username}'. Comment: '{comment_id}'")
