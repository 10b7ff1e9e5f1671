from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    api_prefix: str = "/api/post-service"
    allowed_hosts: List[str] = ["*"]
    cors_origins: List[str] = ["*"]

    # Firestore
    firestore_project: Optional[str] = None
    posts_collection: str = "posts"

    # Auth: jwt_secret wins over the Secret Manager lookup when set
    jwt_algorithm: str = "HS256"
    jwt_secret: Optional[str] = None
    jwt_secret_id: Optional[str] = None
    auth_token_url: str = "token"


@lru_cache
def get_settings() -> Settings:
    return Settings()
