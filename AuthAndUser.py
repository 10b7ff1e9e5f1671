from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jwt.exceptions import InvalidTokenError
from pydantic import ValidationError
import logging

import secretmanager
from config import Settings, get_settings
from domain.user import Identity

logger = logging.getLogger('uvicorn.error')

# Tokens are issued by the platform's auth service; this service only verifies them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=get_settings().auth_token_url)


def get_secret_key(settings: Settings) -> str:
    if settings.jwt_secret:
        return settings.jwt_secret
    if not settings.jwt_secret_id:
        raise RuntimeError("Neither JWT_SECRET nor JWT_SECRET_ID is configured")
    return secretmanager.get_secret(settings.jwt_secret_id)


def decode_identity(token: str, settings: Settings) -> Identity:
    """
    Verifies ``token`` and reads the caller's identity from its claims.
    ``username`` falls back to the standard ``sub`` claim.
    Raises InvalidTokenError when the token or its claims are unusable.
    """
    payload = jwt.decode(token, get_secret_key(settings), algorithms=[settings.jwt_algorithm])
    username = payload.get("username") or payload.get("sub")
    role = payload.get("role")
    if username is None or role is None:
        raise InvalidTokenError("token is missing the username or role claim")
    try:
        return Identity(username=username, role=role)
    except ValidationError as e:
        raise InvalidTokenError(str(e)) from e


async def get_current_identity(
    token: Annotated[str, Depends(oauth2_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Identity:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        identity = decode_identity(token, settings)
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise credentials_exception
    except Exception as e:
        logger.exception(f"Unable to verify bearer token: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")
    logger.debug(f"current identity: {identity}")
    return identity
