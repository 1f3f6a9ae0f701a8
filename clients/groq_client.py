from typing import List, Dict, Optional
import logging

from groq import Groq

logger = logging.getLogger(__name__)


def create_groq_client(api_key: Optional[str]) -> Optional[Groq]:
    """Build a Groq client, or None when no key is configured."""
    if not api_key:
        return None
    return Groq(api_key=api_key)


def generate_completion(
    client: Groq,
    messages: List[Dict[str, str]],
    model: str = "llama-3.3-70b-versatile",
    temperature: float = 0.7,
    max_tokens: Optional[int] = None
) -> str:
    """
    Run a single chat completion against Groq and return the message text.
    Args:
        client: Groq SDK client.
        messages: Chat messages (role/content dicts).
        model: Groq model id.
        temperature: Sampling temperature.
        max_tokens: Optional completion token cap.
    Returns:
        The completion text, or an empty string if the model returned none.
    Raises:
        groq.APIError (or subclasses) when the API call fails.
    """
    params = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
        "stream": False
    }
    if max_tokens:
        params["max_tokens"] = max_tokens

    response = client.chat.completions.create(**params)
    choice = response.choices[0] if response.choices else None
    if choice is None:
        return ""

    if choice.finish_reason == "length":
        logger.warning(f"Groq response truncated at max_tokens for model {model}")

    return choice.message.content or ""
