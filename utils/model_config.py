"""
Model configuration for study plan and lesson generation.
Centralized model management so backends share one source of truth.
"""

from typing import Dict, Any, Optional


# Model configurations
MODEL_CONFIGS: Dict[str, Dict[str, Any]] = {
    "llama-3.3-70b": {
        "model": "llama-3.3-70b-versatile",
        "max_tokens": 8192,
        "temperature": 0.7,
        # Keeps a request under the free tier's 12k tokens-per-minute budget
        "max_content_chars": 30000,
    },
    "llama-3.3-70b-lesson": {
        "model": "llama-3.3-70b-versatile",
        "max_tokens": 2048,
        "temperature": 0.5,
        "max_content_chars": 0,
    },
    "gemini-2.0-flash": {
        "model": "gemini-2.0-flash",
        "max_tokens": 8192,
        "temperature": 0.7,
        "max_content_chars": 500000,
    },
}

PRIMARY_PLAN_MODEL = "llama-3.3-70b"
FALLBACK_PLAN_MODEL = "gemini-2.0-flash"
LESSON_MODEL = "llama-3.3-70b-lesson"


class ModelConfig:
    """Model configuration manager"""

    @staticmethod
    def get_config(model_key: Optional[str] = None) -> Dict[str, Any]:
        """Get configuration for specified model or the primary plan model"""
        key = model_key or PRIMARY_PLAN_MODEL

        if key not in MODEL_CONFIGS:
            raise ValueError(f"Unknown model: {key}. Available: {list(MODEL_CONFIGS.keys())}")

        return MODEL_CONFIGS[key]

