from typing import Optional
import logging

from google import genai

logger = logging.getLogger(__name__)


def create_gemini_client(api_key: Optional[str]) -> Optional[genai.Client]:
    """Build a Gemini client, or None when no key is configured."""
    if not api_key:
        return None
    return genai.Client(api_key=api_key)


def generate_json(
    client: genai.Client,
    prompt: str,
    model: str = "gemini-2.0-flash",
    temperature: float = 0.7,
    max_tokens: Optional[int] = None
) -> str:
    """
    Generate content with Gemini's JSON output mode and return the raw text.
    Raises whatever the SDK raises (google.genai.errors.APIError etc.).
    """
    config = {
        "temperature": temperature,
        "response_mime_type": "application/json",
    }
    if max_tokens:
        config["max_output_tokens"] = max_tokens

    response = client.models.generate_content(
        model=model,
        contents=prompt,
        config=config,
    )
    return response.text or ""
