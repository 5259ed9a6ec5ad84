"""OpenAI text generation client and JSON reply parsing."""

import copy
import json
import logging
import re
from typing import Any, Optional, Protocol

logger = logging.getLogger("profile_analyzer.analysis.llm")

JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class TextGenerator(Protocol):
    """Anything that turns a prompt into a text reply."""

    def submit(self, prompt: str) -> str:
        ...


class OpenAITextGenerator:
    """TextGenerator backed by the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_tokens: int = 1024,
        client: Optional[Any] = None,
    ):
        if client is None:
            try:
                from openai import OpenAI
            except ImportError:
                raise ImportError("openai package required for AI analysis. Install with: pip install openai")
            client = OpenAI(api_key=api_key)

        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def submit(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        content = response.choices[0].message.content or ""
        logger.debug("Received %d characters from %s", len(content), self.model)
        return content.strip()


def extract_json_object(text: str, default: dict) -> dict:
    """Parse the outermost ``{...}`` block of a reply.

    Returns a deep copy of ``default`` when there is no block, it is not
    valid JSON, or it does not decode to an object.
    """
    match = JSON_OBJECT.search(text or "")
    if not match:
        logger.warning("No JSON object found in generated reply")
        return copy.deepcopy(default)

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse generated reply as JSON: %s", e)
        return copy.deepcopy(default)

    if not isinstance(parsed, dict):
        logger.warning("Generated reply decoded to %s, expected an object", type(parsed).__name__)
        return copy.deepcopy(default)

    return parsed
