import re
import logging
from typing import Optional

from clients.groq_client import generate_completion
from prompts.plan_prompts import LESSON_SYSTEM_PROMPT, build_lesson_prompt
from utils.model_config import ModelConfig, LESSON_MODEL

logger = logging.getLogger(__name__)

EMPTY_CONTENT_HTML = "<p>Failed to generate content.</p>"
ERROR_CONTENT_HTML = "<p>Error generating content. Please try again later.</p>"

_HTML_FENCE_RE = re.compile(r"```(?:html)?", re.IGNORECASE)


class LessonContentGenerator:
    """
    Expands one plan topic into an HTML lesson with a single Groq call.
    Failures are absorbed: the caller always gets HTML back.
    """

    def __init__(self, client, model_key: str = LESSON_MODEL):
        self.client = client
        self.model_config = ModelConfig.get_config(model_key)

    def generate(self, topic: str) -> str:
        if self.client is None:
            logger.error("Lesson content requested but no Groq client is configured")
            return ERROR_CONTENT_HTML

        logger.info(f"Generating lesson content for: {topic}")
        try:
            content = generate_completion(
                self.client,
                [
                    {"role": "system", "content": LESSON_SYSTEM_PROMPT},
                    {"role": "user", "content": build_lesson_prompt(topic)},
                ],
                model=self.model_config["model"],
                temperature=self.model_config["temperature"],
                max_tokens=self.model_config["max_tokens"],
            )
        except Exception as e:
            logger.error(f"Error generating lesson content for '{topic}': {e}")
            return ERROR_CONTENT_HTML

        return self.clean_html(content) or EMPTY_CONTENT_HTML

    @staticmethod
    def clean_html(content: Optional[str]) -> str:
        return _HTML_FENCE_RE.sub("", content or "").strip()
