import logging
from typing import Any, Dict, List, Optional

from google.cloud.firestore import AsyncClient, FieldFilter

logger = logging.getLogger('uvicorn.error')


class PostStore:
    """
    Thin adapter over the posts collection of a Firestore AsyncClient.

    Documents are keyed by their ``postId`` and also carry it as a field,
    so a post can be found either by key or by field query. Callers pass
    and receive plain dicts; no method retries or guards concurrent writes.
    """

    def __init__(self, db: AsyncClient, collection: str = "posts"):
        self.db = db
        self.collection_name = collection

    @property
    def collection(self):
        return self.db.collection(self.collection_name)

    async def create(self, post: Dict[str, Any]) -> None:
        await self.collection.document(post["postId"]).set(post)

    async def get(self, post_id: str) -> Optional[Dict[str, Any]]:
        doc = await self.collection.document(post_id).get()
        if not doc.exists:
            return None
        return doc.to_dict()

    async def find_by_post_id(self, post_id: str) -> Optional[Dict[str, Any]]:
        query = self.collection.where(filter=FieldFilter("postId", "==", post_id)).limit(1)
        docs = await query.get()
        if not docs:
            return None
        return docs[0].to_dict()

    async def find_by_author(self, username: str) -> List[Dict[str, Any]]:
        query = self.collection.where(filter=FieldFilter("postedBy", "==", username))
        return [doc.to_dict() async for doc in query.stream()]

    async def list_all(self) -> List[Dict[str, Any]]:
        return [doc.to_dict() async for doc in self.collection.stream()]

    async def update(self, post_id: str, fields: Dict[str, Any]) -> None:
        await self.collection.document(post_id).update(fields)

    async def delete(self, post_id: str) -> None:
        await self.collection.document(post_id).delete()
