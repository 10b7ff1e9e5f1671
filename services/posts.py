import logging
from typing import List

from domain.posts import CONTENT_FIELDS, Post, PostFields
from domain.user import Identity
from services import authorization
from services.errors import Forbidden, NotFound
from services.post_store import PostStore

logger = logging.getLogger('uvicorn.error')


async def create_post(store: PostStore, identity: Identity, fields: PostFields) -> Post:
    if not authorization.can_create_post(identity):
        logger.warning(f"User '{identity.username}' with role '{identity.role}' attempted to create a post.")
        raise Forbidden("Unauthorized to create a post")

    post = Post(postedBy=identity.username, comments=[], **fields.model_dump())
    await store.create(post.model_dump())
    logger.info(f"User '{identity.username}' created post '{post.postId}'")
    return post


async def get_post(store: PostStore, post_id: str) -> Post:
    post_data = await store.find_by_post_id(post_id)
    if post_data is None:
        logger.warning(f"No post found with postId '{post_id}'")
        raise NotFound("Post not found")
    return Post.model_validate(post_data)


async def get_posts_by_user(store: PostStore, user_id: str) -> List[Post]:
    # No ordering is promised here; posts come back in store order.
    return [Post.model_validate(data) for data in await store.find_by_author(user_id)]


async def list_posts(store: PostStore) -> List[Post]:
    """Returns every post, most recently created first."""
    posts = [Post.model_validate(data) for data in await store.list_all()]
    return sorted(posts, key=lambda post: post.createdAt, reverse=True)


async def _load_for_modification(store: PostStore, post_id: str, identity: Identity, action: str) -> dict:
    post_data = await store.get(post_id)
    if post_data is None:
        logger.warning(f"User '{identity.username}' attempted to {action} missing post '{post_id}'")
        raise NotFound("Post not found")
    if not authorization.can_modify_post(identity, post_data):
        logger.warning(
            f"Forbidden: User '{identity.username}' attempted to {action} post '{post_id}' "
            f"owned by '{post_data.get('postedBy')}'."
        )
        raise Forbidden(f"Unauthorized to {action} this post")
    return post_data


async def update_post(store: PostStore, post_id: str, identity: Identity, fields: PostFields) -> Post:
    """
    Overwrites the content fields of a post. Everything else on the stored
    document (postId, createdAt, postedBy, comments) is written back as read.
    """
    post_data = await _load_for_modification(store, post_id, identity, "update")
    updated_post_data = {**post_data, **fields.model_dump(include=set(CONTENT_FIELDS))}
    await store.update(post_id, updated_post_data)
    logger.info(f"User '{identity.username}' updated post '{post_id}'")
    return Post.model_validate(updated_post_data)


async def delete_post(store: PostStore, post_id: str, identity: Identity) -> None:
    await _load_for_modification(store, post_id, identity, "delete")
    await store.delete(post_id)
    logger.info(f"User '{identity.username}' deleted post '{post_id}' and its comments")
