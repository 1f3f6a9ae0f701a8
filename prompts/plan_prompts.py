"""
Prompt templates for study plan and lesson content generation.
"""

from typing import Any, Dict, List, Optional

MAX_PLAN_DAYS = 30

PLAN_SCHEMA_EXAMPLE = """[
  {
    "day": number,
    "title": "string",
    "topics": ["string", "string"],
    "estimatedTime": "string"
  }
]"""

QUESTIONNAIRE_LABELS = {
    "age_group": "Age group",
    "current_status": "Current status",
    "primary_goal": "Primary goal",
    "pursuing": "Currently pursuing",
    "primary_domain": "Primary domain",
    "explanation_preference": "Preferred explanation style",
}


def build_learner_profile_section(
    age: Optional[int] = None,
    questionnaire: Optional[Dict[str, Any]] = None
) -> str:
    """Personalization block shared by every plan prompt. Empty when nothing is known."""
    lines: List[str] = []
    if age:
        lines.append(f"- Age: {age}")
    for key, label in QUESTIONNAIRE_LABELS.items():
        value = (questionnaire or {}).get(key)
        if value:
            lines.append(f"- {label}: {value}")

    if not lines:
        return ""

    return (
        "\nLEARNER PROFILE:\n"
        + "\n".join(lines)
        + "\nAdapt the pacing, vocabulary and daily workload to this learner.\n"
    )


PRIMARY_PLAN_SYSTEM_PROMPT = """You are an expert study planner. Return ONLY valid JSON array. No markdown.
Schema: [{"day": 1, "title": "...", "topics": ["..."], "estimatedTime": "..."}]"""


def build_primary_plan_prompt(
    content: str,
    exam_date: str,
    days_until_exam: int,
    profile_section: str = ""
) -> str:
    """User message for the primary (chat completion) backend. Content must already be truncated."""
    return f"""Exam Date: {exam_date}. Days Remaining: {days_until_exam}.
Create a comprehensive, day-by-day study plan to master the material provided below.
{profile_section}
INSTRUCTIONS:
1. Analyze the provided study material content thoroughly.
2. Distribute topics logically over the available days (at most {MAX_PLAN_DAYS} days).
3. Ensure the plan is balanced.

OUTPUT FORMAT:
Return a JSON array of objects. Each object represents a study day.
Schema:
{PLAN_SCHEMA_EXAMPLE}

STUDY MATERIAL CONTENT:
{content}"""


def build_fallback_plan_prompt(
    content: str,
    exam_date: str,
    days_until_exam: int,
    profile_section: str = ""
) -> str:
    """Single-shot prompt for the fallback backend, which has a much larger context window."""
    return f"""You are an expert academic study planner and curriculum designer.

CONTEXT:
- Exam Date: {exam_date}
- Days Remaining: {days_until_exam}
- Goal: Create a comprehensive, day-by-day study plan to master the material provided below.
{profile_section}
INSTRUCTIONS:
1. Analyze the provided study material content thoroughly. Identify key modules, chapters, and topics.
2. Distribute these topics logically over the available days (up to a maximum of {MAX_PLAN_DAYS} days).
3. Ensure the plan is balanced: mix heavy theoretical topics with lighter review or practice sessions.
4. If the exam is very close (e.g., < 5 days), create an intensive "cramming" schedule focusing on high-yield topics.
5. If the exam is far away, create a paced schedule with built-in review days.

OUTPUT FORMAT:
Return a JSON array of objects. Each object represents a study day.
- "day": 1, 2, 3...
- "title": brief title of the day's focus (e.g., "Chapter 1: Algebra Basics")
- "topics": list of 3-5 specific sub-topics to cover
- "estimatedTime": e.g., "2 hours", "4 hours"
Schema:
{PLAN_SCHEMA_EXAMPLE}

STUDY MATERIAL CONTENT:
{content}"""


LESSON_SYSTEM_PROMPT = """You are an expert educational content creator. Your task is to generate high-quality, comprehensive learning material for a specific topic.

OUTPUT FORMAT:
Return ONLY raw HTML. Do not include markdown code blocks (like ```html).
Use Tailwind CSS classes for styling.

DESIGN GUIDELINES:
- Use a clean, professional layout.
- Use colors like bg-blue-50, text-blue-900, border-blue-500 for highlights.
- Use bg-gray-50, border-gray-200 for sections.
- Include a "Key Insight" box at the start.
- Use clear headings (h3, h4) and paragraph tags.
- If appropriate for the topic, include a comparison table or a step-by-step list.
- Do NOT use generic placeholders like "Introduction to [Topic]". Write the actual content.
- The content should be educational, factual, and detailed (approx. 300-500 words).

STRUCTURE:
1. Brief Introduction (Directly explaining what it is).
2. Key Insight Box (A crucial takeaway).
3. Core Concepts / Historical Context / Architecture / Process (Choose the most relevant structure for the topic).
4. Detailed Explanation (Use lists, bold text, etc.).
5. Practical Application or Example."""


def build_lesson_prompt(topic: str) -> str:
    return f'Generate a lesson module for the topic: "{topic}".'
