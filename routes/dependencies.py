"""
Request-scoped accessors for the services built once in main.create_app().
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from services.plan_generator import PlanGenerator
from services.lesson_generator import LessonContentGenerator
from services.plan_storage import PlanStorage
from utils.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_plan_generator(request: Request) -> PlanGenerator:
    return request.app.state.plan_generator


def get_lesson_generator(request: Request) -> LessonContentGenerator:
    return request.app.state.lesson_generator


def get_plan_storage(request: Request) -> PlanStorage:
    return request.app.state.plan_storage


def get_bearer_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]
) -> Optional[str]:
    if not credentials:
        return None
    return credentials.credentials


def get_current_user_id(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
    storage: Annotated[PlanStorage, Depends(get_plan_storage)]
) -> str:
    """Resolve the caller's Supabase user id or raise 401."""
    # 503 takes precedence over 401
    storage.require_client()
    if not token:
        raise AuthenticationError("Missing authorization header", error_code="MISSING_AUTHORIZATION")
    user_id = storage.get_user_id(token)
    if not user_id:
        raise AuthenticationError()
    return user_id
