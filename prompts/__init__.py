# Prompts module initialization

# Study Plan Prompts
from .plan_prompts import (
    build_learner_profile_section,
    build_primary_plan_prompt,
    build_fallback_plan_prompt,
    build_lesson_prompt,
    PRIMARY_PLAN_SYSTEM_PROMPT,
    LESSON_SYSTEM_PROMPT,
    MAX_PLAN_DAYS
)

__all__ = [
    'build_learner_profile_section',
    'build_primary_plan_prompt',
    'build_fallback_plan_prompt',
    'build_lesson_prompt',
    'PRIMARY_PLAN_SYSTEM_PROMPT',
    'LESSON_SYSTEM_PROMPT',
    'MAX_PLAN_DAYS'
]
