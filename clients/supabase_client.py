from typing import Dict, Any, List, Optional
import logging

from supabase import create_client, Client, ClientOptions

logger = logging.getLogger(__name__)

STUDY_PLAN_COLUMNS = "id, created_at, title, exam_date, files, plan"


def create_supabase(url: Optional[str], key: Optional[str]) -> Optional[Client]:
    """
    Build the server-side Supabase client.
    Returns None when URL or key is missing so callers can disable storage.
    """
    if not url or not key:
        return None
    return create_client(
        url,
        key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


# --- Auth ---

def get_user_id_for_token(client: Client, access_token: str) -> Optional[str]:
    """Resolve a Supabase access token to its user id, None if invalid."""
    response = client.auth.get_user(access_token)
    user = getattr(response, "user", None)
    if user is None:
        return None
    return str(user.id)


# --- Study plans ---

def insert_study_plan(client: Client, plan_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Insert a row into 'study_plans' and return the stored record.
    Raises:
        Exception if insertion fails or nothing is returned.
    """
    response = client.table("study_plans").insert(plan_data).execute()
    if not response.data:
        raise Exception(f"Supabase insert failed or no row returned: {response}")
    row = response.data[0]
    return {k: row.get(k) for k in ("id", "created_at", "title", "exam_date", "files", "plan")}


def list_study_plans_by_user(client: Client, user_id: str) -> List[Dict[str, Any]]:
    """List study plans for a user, ordered by created_at desc."""
    response = client.table("study_plans") \
        .select(STUDY_PLAN_COLUMNS) \
        .eq("user_id", user_id) \
        .order("created_at", desc=True) \
        .execute()
    return response.data or []


# --- Questionnaire ---

def get_user_questionnaire(client: Client, user_id: str) -> Optional[Dict[str, Any]]:
    """Get the questionnaire row for a user, None if they never answered."""
    response = client.table("user_questionnaire") \
        .select("*").eq("user_id", user_id).limit(1).execute()
    if response.data and len(response.data) > 0:
        return response.data[0]
    return None


def upsert_user_questionnaire(client: Client, answers: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Upsert questionnaire answers keyed by user_id."""
    response = client.table("user_questionnaire").upsert(
        answers, on_conflict="user_id"
    ).execute()
    return response.data or []
