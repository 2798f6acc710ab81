"""
Search assist service: LLM-generated alternative queries via Google AI.

When no API key is configured the service is disabled and every query gets
an empty suggestion list.
"""
import asyncio
import json
import logging
import re
from typing import List, Optional

from google import genai
from google.genai import errors

from core.config import settings

logger = logging.getLogger(__name__)

ASSIST_PROMPT = (
    'User search query: "{query}"\n'
    "Return {count} short alternative queries or expansions "
    "(synonyms, common brand/model names, category terms).\n"
    "Return as a JSON array of strings only."
)

_QUOTED = re.compile(r'"([^"\r\n]+)"')


class SearchAssistError(Exception):
    """The language model could not be reached or timed out"""


def _strip_wrapping(text: str) -> str:
    """Remove code fences, a leading "json" label and typographic quotes"""
    text = re.sub(r"^```(?:json)?", "", text, flags=re.IGNORECASE)
    text = re.sub(r"```$", "", text)
    text = text.replace("```", "")
    text = re.sub(r"^\s*json\s*", "", text, flags=re.IGNORECASE)
    text = text.replace("“", '"').replace("”", '"')
    return text.strip()


def parse_suggestions(text: Optional[str], limit: int = 6) -> List[str]:
    """
    Read alternative queries out of a model reply.

    A JSON array is preferred. Otherwise quoted strings are collected, and
    failing that the text is split on newlines and commas.
    """
    cleaned = _strip_wrapping(text or "")
    if not cleaned:
        return []

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        quoted = _QUOTED.findall(cleaned)
        if quoted:
            candidates = quoted
        else:
            candidates = [
                part.strip().strip('"')
                for part in re.split(r"\n|,", cleaned.replace("[", "").replace("]", ""))
            ]
    else:
        if not isinstance(parsed, list):
            return []
        candidates = [item for item in parsed if isinstance(item, str)]

    suggestions = [c.strip() for c in candidates if c and c.strip()]
    return suggestions[:limit]


class SearchAssistService:
    """Suggests alternative search queries with a Gemini model"""

    def __init__(self, api_key: Optional[str] = None, client=None, timeout: Optional[float] = None):
        self.api_key = settings.google_ai_api_key if api_key is None else api_key
        self.model = settings.search_assist_model
        self.max_suggestions = settings.search_assist_max_suggestions
        self.timeout = settings.search_assist_timeout if timeout is None else timeout

        if client is not None:
            self.genai_client = client
        elif self.api_key:
            self.genai_client = genai.Client(api_key=self.api_key)
            logger.info(f"Search assist enabled with {self.model}")
        else:
            self.genai_client = None
            logger.warning("Google AI API key not configured - search assist is disabled")

    @property
    def configured(self) -> bool:
        return self.genai_client is not None

    async def suggest_queries(self, query: Optional[str]) -> List[str]:
        """
        Alternative queries for ``query``.

        Returns an empty list for an empty query or when the service is not
        configured.

        Raises:
            SearchAssistError: if the model call fails or times out
        """
        q = (query or "").strip()
        if not q or not self.configured:
            return []

        prompt = ASSIST_PROMPT.format(query=q, count=self.max_suggestions)

        def _run_generate():
            """Run the blocking generate_content call in a separate thread"""
            response = self.genai_client.models.generate_content(model=self.model, contents=prompt)
            return response.text or ""

        loop = asyncio.get_running_loop()
        try:
            text = await asyncio.wait_for(loop.run_in_executor(None, _run_generate), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Search assist timed out after {self.timeout}s for '{q}'")
            raise SearchAssistError("Search assist timed out") from e
        except errors.APIError as e:
            logger.error(f"Search assist request failed for '{q}': {e}")
            raise SearchAssistError("Search assist request failed") from e

        suggestions = parse_suggestions(text, limit=self.max_suggestions)
        logger.info(f"Search assist '{q}': {len(suggestions)} suggestions")
        return suggestions


# Global service instance
search_assist_service = SearchAssistService()
