import logging
from fastapi import APIRouter, Request, Depends
from google.cloud.firestore import AsyncClient
from typing import Annotated

import AuthAndUser as auth
from config import Settings, get_settings
from domain.comments import CommentIn
from domain.envelope import CommentEnvelope, Envelope, PostEnvelope, PostListEnvelope
from domain.posts import PostFields
from domain.user import Identity
from services import comments as comment_service
from services import posts as post_service
from services.errors import InternalError, PostServiceError
from services.post_store import PostStore

logger = logging.getLogger('uvicorn.error')

router = APIRouter(
    prefix="/posts",
    tags=["posts", "comments"]
)

CurrentIdentity = Annotated[Identity, Depends(auth.get_current_identity)]


# --- Helper Functions ---
async def get_post_store(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> PostStore:
    if not hasattr(request.app.state, 'db') or not request.app.state.db:
        logger.error("Firestore client not initialized or unavailable.")
        raise InternalError()
    if not isinstance(request.app.state.db, AsyncClient):
        logger.error("Firestore client is not an AsyncClient in posts router.")
        raise InternalError()
    return PostStore(request.app.state.db, settings.posts_collection)

Store = Annotated[PostStore, Depends(get_post_store)]


# --- Post API Routes ---
@router.post("/create", response_model=PostEnvelope)
async def create_post(post_in: PostFields, identity: CurrentIdentity, store: Store):
    try:
        post = await post_service.create_post(store, identity, post_in)
        return PostEnvelope(message="Post created successfully", post=post)
    except PostServiceError:
        raise
    except Exception as e:
        logger.exception(f"Error creating post for user '{identity.username}': {e}")
        raise InternalError()


@router.get("/user/{userId}", response_model=PostListEnvelope)
async def get_posts_by_user(userId: str, identity: CurrentIdentity, store: Store):
    try:
        posts = await post_service.get_posts_by_user(store, userId)
        return PostListEnvelope(message="Posts found", post=posts)
    except Exception as e:
        logger.exception(f"Error fetching posts by userId '{userId}': {e}")
        raise InternalError()


@router.get("", response_model=PostListEnvelope)
async def get_all_posts(identity: CurrentIdentity, store: Store):
    try:
        posts = await post_service.list_posts(store)
        return PostListEnvelope(message="Posts found", post=posts)
    except Exception as e:
        logger.exception(f"Error fetching posts: {e}")
        raise InternalError()


@router.get("/{postId}", response_model=PostEnvelope)
async def get_post_by_id(postId: str, identity: CurrentIdentity, store: Store):
    try:
        post = await post_service.get_post(store, postId)
        return PostEnvelope(message="Post found", post=post)
    except PostServiceError:
        raise
    except Exception as e:
        logger.exception(f"Error fetching post '{postId}': {e}")
        raise InternalError()


@router.put("/update/{postId}", response_model=PostEnvelope)
async def update_post(postId: str, post_in: PostFields, identity: CurrentIdentity, store: Store):
    try:
        post = await post_service.update_post(store, postId, identity, post_in)
        return PostEnvelope(message="Post updated successfully", post=post)
    except PostServiceError:
        raise
    except Exception as e:
        logger.exception(f"Error updating post '{postId}' for user '{identity.username}': {e}")
        raise InternalError()


@router.delete("/delete/{postId}", response_model=Envelope)
async def delete_post(postId: str, identity: CurrentIdentity, store: Store):
    try:
        await post_service.delete_post(store, postId, identity)
        return Envelope(message="Post deleted successfully")
    except PostServiceError:
        raise
    except Exception as e:
        logger.exception(f"Error deleting post '{postId}' for user '{identity.username}': {e}")
        raise InternalError()


# --- Comment API Routes ---
@router.post("/{postId}/addcomment", response_model=CommentEnvelope)
async def add_comment(postId: str, comment_in: CommentIn, identity: CurrentIdentity, store: Store):
    try:
        comment = await comment_service.add_comment(store, postId, comment_in.userId, comment_in.comment)
        return CommentEnvelope(message="Comment added successfully", comment=comment)
    except PostServiceError:
        raise
    except Exception as e:
        logger.exception(f"Error adding comment to post '{postId}' for user '{identity.username}': {e}")
        raise InternalError()


@router.delete("/{postId}/comments/{commentId}/delete", response_model=Envelope)
async def delete_comment(postId: str, commentId: str, identity: CurrentIdentity, store: Store):
    try:
        await comment_service.delete_comment(store, postId, commentId, identity)
        return Envelope(message="Comment deleted successfully")
    except PostServiceError:
        raise
    except Exception as e:
        logger.exception(f"Error deleting comment '{commentId}' on post '{postId}': {e}")
        raise InternalError()
