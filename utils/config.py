"""
Process-wide configuration, read once from the environment at startup.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class AppConfig:
    groq_api_key: Optional[str] = None
    groq_content_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    log_file: Optional[str] = None
    generation_log_file: Optional[str] = None

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "AppConfig":
        if load_dotenv_file:
            load_dotenv()

        groq_key = os.getenv("GROQ_API_KEY")
        origins = os.getenv("CORS_ORIGINS", "*")

        config = cls(
            groq_api_key=groq_key,
            # Separate key lets lesson generation use its own rate limit
            groq_content_api_key=os.getenv("GROQ_CONTENT_API_KEY") or groq_key,
            gemini_api_key=_first_env("GEMINI_API_KEY", "GOOGLE_API_KEY"),
            supabase_url=_first_env("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
            supabase_key=_first_env(
                "SUPABASE_SERVICE_ROLE_KEY",
                "SUPABASE_KEY",
                "NEXT_PUBLIC_SUPABASE_ANON_KEY",
            ),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE"),
            generation_log_file=os.getenv("GENERATION_LOG_FILE"),
        )

        if not config.supabase_enabled:
            logger.warning(
                "Supabase URL or service role key is missing. "
                "Study plan storage and questionnaires will be disabled."
            )
        if not config.groq_api_key and not config.gemini_api_key:
            logger.warning("No GROQ_API_KEY or GEMINI_API_KEY set; plan generation will fail")

        return config

    @property
    def supabase_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)
