import copy
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

import AuthAndUser as auth
from domain.user import Identity
from main import app
from routers.posts import get_post_store


class InMemoryPostStore:
    """Stands in for the Firestore-backed PostStore; documents are copied in and out."""

    def __init__(self):
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.fail_with: Optional[Exception] = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def create(self, post: Dict[str, Any]) -> None:
        self._check()
        self.docs[post["postId"]] = copy.deepcopy(post)

    async def get(self, post_id: str) -> Optional[Dict[str, Any]]:
        self._check()
        doc = self.docs.get(post_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def find_by_post_id(self, post_id: str) -> Optional[Dict[str, Any]]:
        self._check()
        for doc in self.docs.values():
            if doc.get("postId") == post_id:
                return copy.deepcopy(doc)
        return None

    async def find_by_author(self, username: str) -> List[Dict[str, Any]]:
        self._check()
        return [copy.deepcopy(doc) for doc in self.docs.values() if doc.get("postedBy") == username]

    async def list_all(self) -> List[Dict[str, Any]]:
        self._check()
        return [copy.deepcopy(doc) for doc in self.docs.values()]

    async def update(self, post_id: str, fields: Dict[str, Any]) -> None:
        self._check()
        if post_id not in self.docs:
            raise KeyError(post_id)
        self.docs[post_id].update(copy.deepcopy(fields))

    async def delete(self, post_id: str) -> None:
        self._check()
        self.docs.pop(post_id, None)


@pytest.fixture()
def store() -> InMemoryPostStore:
    return InMemoryPostStore()


@pytest.fixture()
def alice() -> Identity:
    return Identity(username="alice", role="teacher")


@pytest.fixture()
def bob() -> Identity:
    return Identity(username="bob", role="student")


@pytest.fixture()
def admin() -> Identity:
    return Identity(username="root", role="admin")


class ApiClient:
    """TestClient wrapper that lets a test switch the calling identity."""

    def __init__(self, client: TestClient):
        self.client = client
        self.identity: Optional[Identity] = None

    def as_user(self, identity: Identity) -> TestClient:
        self.identity = identity
        return self.client


@pytest.fixture()
def api(store):
    api_client = ApiClient(TestClient(app))
    app.dependency_overrides[get_post_store] = lambda: store
    app.dependency_overrides[auth.get_current_identity] = lambda: api_client.identity
    yield api_client
    app.dependency_overrides.clear()
