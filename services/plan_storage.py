"""
Supabase-backed storage for saved study plans and learner questionnaires.
Every operation raises ServiceUnavailableError when Supabase is not configured.
"""

import logging
from typing import Any, Dict, List, Optional

from clients.supabase_client import (
    get_user_id_for_token,
    insert_study_plan,
    list_study_plans_by_user,
    get_user_questionnaire,
    upsert_user_questionnaire,
)
from utils.exceptions import ServiceUnavailableError, StorageError

logger = logging.getLogger(__name__)


class PlanStorage:

    def __init__(self, client=None):
        self.client = client

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def require_client(self):
        if self.client is None:
            raise ServiceUnavailableError(
                "Supabase is not configured", error_code="SUPABASE_NOT_CONFIGURED"
            )
        return self.client

    def get_user_id(self, access_token: str) -> Optional[str]:
        """Resolve a bearer token to a user id; None when Supabase rejects it."""
        client = self.require_client()
        try:
            return get_user_id_for_token(client, access_token)
        except Exception as e:
            logger.warning(f"Supabase rejected access token: {e}")
            return None

    def save_plan(self, plan_data: Dict[str, Any]) -> Dict[str, Any]:
        client = self.require_client()
        try:
            return insert_study_plan(client, plan_data)
        except Exception as e:
            logger.error(f"Supabase insert error: {e}")
            raise StorageError(f"Failed to save study plan: {e}") from e

    def list_plans(self, user_id: str) -> List[Dict[str, Any]]:
        client = self.require_client()
        try:
            return list_study_plans_by_user(client, user_id)
        except Exception as e:
            logger.error(f"Supabase fetch error: {e}")
            raise StorageError(f"Failed to fetch study plans: {e}") from e

    def get_questionnaire(self, user_id: str) -> Optional[Dict[str, Any]]:
        client = self.require_client()
        try:
            return get_user_questionnaire(client, user_id)
        except Exception as e:
            logger.error(f"Error fetching questionnaire for {user_id}: {e}")
            raise StorageError(f"Failed to fetch questionnaire: {e}") from e

    def save_questionnaire(self, user_id: str, answers: Dict[str, Any]) -> List[Dict[str, Any]]:
        client = self.require_client()
        try:
            return upsert_user_questionnaire(client, {"user_id": user_id, **answers})
        except Exception as e:
            logger.error(f"Error saving questionnaire for {user_id}: {e}")
            raise StorageError(f"Failed to save questionnaire: {e}") from e
