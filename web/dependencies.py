import logging
from typing import AsyncGenerator

from fastapi import Request, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

import config
from db import get_db_session
from enums.message_entity import MessageEntity
from utils.auth_token import extract_bearer_token, validate_auth_token, AuthTokenValidationError
from utils.localizator import Localizator

logger = logging.getLogger(__name__)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with get_db_session() as session:
        yield session


def get_lang(request: Request) -> str:
    return Localizator.resolve_language(request.headers.get("Accept-Language"))


def get_current_user_id(request: Request) -> str:
    """
    Authenticated user id from the "Authorization: Bearer <token>" header.

    Raises:
        HTTPException: 401 with a localized notice if the token is missing or invalid
    """
    try:
        token = extract_bearer_token(request.headers.get("Authorization"))
        return validate_auth_token(token, config.AUTH_TOKEN_SECRET, config.AUTH_TOKEN_MAX_AGE_SECONDS)
    except AuthTokenValidationError as e:
        logger.warning(f"Authentication failed for {request.url.path}: {e}")
        lang = get_lang(request)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "title": Localizator.get_text(MessageEntity.COMMON, "error_title", lang),
                "description": Localizator.get_text(MessageEntity.COMMON, "error_unauthorized", lang),
                "variant": "destructive",
            }
        )


def get_client_id(request: Request) -> str:
    """Browser-generated id that keys per-client flags such as the privacy acknowledgement."""
    client_id = request.headers.get("X-Client-Id", "").strip()
    if not client_id or len(client_id) > 128:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing or invalid X-Client-Id header")
    return client_id
