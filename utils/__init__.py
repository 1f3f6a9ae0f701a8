# Study Planner Utilities
from .file_storage import (
    GenerationLogger,
    read_json_file,
    write_json_file
)

from .model_config import (
    ModelConfig,
    MODEL_CONFIGS,
    PRIMARY_PLAN_MODEL,
    FALLBACK_PLAN_MODEL,
    LESSON_MODEL
)

from .config import AppConfig

__all__ = [
    'GenerationLogger',
    'read_json_file',
    'write_json_file',
    'ModelConfig',
    'MODEL_CONFIGS',
    'PRIMARY_PLAN_MODEL',
    'FALLBACK_PLAN_MODEL',
    'LESSON_MODEL',
    'AppConfig'
]
