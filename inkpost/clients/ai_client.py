from logging import getLogger
from typing import Any, NoReturn

from google.genai import Client
from google.genai.client import AsyncClient
from google.genai.types import GenerateContentConfig
from orjson import JSONDecodeError, loads

from inkpost.configs.settings import file_logger, settings
from inkpost.errors import (
    AiAuthenticationError,
    AiError,
    AiInvalidInputError,
    AiModelNotFoundError,
    AiNotConfiguredError,
    AiResponseError,
)
from inkpost.schemas.ai import GeneratedPost
from inkpost.schemas.post import derive_excerpt

logger = file_logger(getLogger(__name__))

GENERATE_SYSTEM_INSTRUCTION = """You are a helpful blog post generator. Generate a complete blog post based on the user's prompt.
Return your response as a JSON object with the following structure:
{
  "title": "A catchy and engaging blog post title",
  "content": "The full blog post content (at least 300 words, well-formatted with paragraphs)",
  "excerpt": "A short 1-2 sentence summary of the post (max 150 characters)",
  "tags": ["tag1", "tag2", "tag3", "tag4"]
}

Make sure the content is well-written, informative, and engaging. The tags should be relevant to the topic.
Only return the JSON object, no additional text or markdown formatting."""

SUMMARIZE_PROMPT = """Summarize the following blog post content in a concise and engaging way.
The summary should be approximately {max_length} characters or less, written as 2-3 sentences that capture the main points and key insights.

Blog post content:
{content}

Provide only the summary text, no additional formatting, labels, or markdown."""

GENERATE_FALLBACK_ERROR = "Failed to generate post content. Please try again."
SUMMARIZE_FALLBACK_ERROR = "Failed to summarize post. Please try again."
UNTITLED_POST = "Untitled Post"


def strip_code_fences(text: str) -> str:
    """
    Remove Markdown code fences wrapped around a JSON payload.

    Examples
    --------
    >>> strip_code_fences('```json\\n{"title": "Go"}\\n```')
    '{"title": "Go"}'
    """
    text = text.strip()
    if text.startswith("```json"):
        text = text.replace("```json\n", "").replace("```json", "")
        text = text.replace("```\n", "").replace("```", "")
    elif text.startswith("```"):
        text = text.replace("```\n", "").replace("```", "")
    return text.strip()


def to_generated_post(payload: Any) -> GeneratedPost:
    """
    Build a post draft from parsed model output, filling missing fields.

    Args:
        payload: Decoded JSON object

    Returns:
        GeneratedPost: Draft with a title, content, excerpt and tag list

    Raises:
        AiResponseError: If the payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise AiResponseError

    content = payload.get("content") or ""
    if not isinstance(content, str):
        content = str(content)
    tags = payload.get("tags")

    return GeneratedPost(
        title=str(payload.get("title") or UNTITLED_POST),
        content=content,
        excerpt=str(payload.get("excerpt") or derive_excerpt(content)),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
    )


class AiClient:
    """
    Async client for Google's Gemini API.

    Calls are made once; failures are mapped to ``AiError`` subclasses whose
    detail is shown to the author as-is.

    Attributes:
        client: The Google GenAI AsyncClient instance, or None without a key.
        model_name: The name of the Gemini model to use.
    """

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        """Initialize the AI client with API credentials."""
        self._api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self._model = model or settings.GEMINI_MODEL
        self._client: AsyncClient | None = None

        if self._api_key:
            self._client = Client(api_key=self._api_key).aio
            logger.info(f"AiClient initialized with model: {self._model}")
        else:
            logger.warning("Gemini API key is not set. AI features will not work.")

    @property
    def client(self) -> AsyncClient:
        """Get the AI client instance."""
        if self._client is None:
            raise AiNotConfiguredError
        return self._client

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    @property
    def model_name(self) -> str:
        return self._model

    async def _generate_text(
        self,
        contents: str,
        config: GenerateContentConfig | None = None,
    ) -> str:
        response = await self.client.models.generate_content(
            model=self._model,
            contents=contents,
            config=config,
        )
        return response.text or ""

    def _handle_exception(self, e: Exception, fallback: str) -> NoReturn:
        """Map upstream exceptions to specific AiError subclasses."""
        error_msg = str(e)
        logger.error(f"AI Error: {error_msg}")

        if "404" in error_msg or "not found" in error_msg:
            raise AiModelNotFoundError from e
        if "API key" in error_msg:
            raise AiAuthenticationError from e
        raise AiError(detail=error_msg or fallback) from e

    async def generate_post(self, prompt: str) -> GeneratedPost:
        """
        Draft a complete blog post from a prompt.

        Args:
            prompt: What the post should be about

        Returns:
            GeneratedPost: Title, Markdown content, excerpt and tags

        Raises:
            AiNotConfiguredError: If no API key is configured
            AiModelNotFoundError: If the model is unavailable
            AiAuthenticationError: If the API key is rejected
            AiResponseError: If the output is not a JSON object
            AiError: For any other upstream failure
        """
        config = GenerateContentConfig(
            response_mime_type="application/json",
            system_instruction=GENERATE_SYSTEM_INSTRUCTION,
            temperature=settings.AI_TEMPERATURE,
            max_output_tokens=settings.AI_MAX_OUTPUT_TOKENS,
        )
        try:
            text = await self._generate_text(f"User prompt: {prompt}", config)
            payload = loads(strip_code_fences(text))
        except AiError:
            raise
        except JSONDecodeError as e:
            logger.warning("AI response was not valid JSON")
            raise AiResponseError from e
        except Exception as e:
            self._handle_exception(e, GENERATE_FALLBACK_ERROR)

        return to_generated_post(payload)

    async def summarize(self, text: str, max_length: int = settings.SUMMARY_MAX_LENGTH) -> str:
        """
        Summarize post content in a few sentences.

        Parameters
        ----------
        text : str
            Post content to summarize.
        max_length : int
            Upper bound for the summary; longer output is cut to
            ``max_length - 3`` characters followed by ``"..."``.

        Returns
        -------
        str
            Plain-text summary.
        """
        if not self.is_configured:
            raise AiNotConfiguredError
        if not text.strip():
            raise AiInvalidInputError

        prompt = SUMMARIZE_PROMPT.format(max_length=max_length, content=text)
        try:
            summary = (await self._generate_text(prompt)).strip()
        except AiError:
            raise
        except Exception as e:
            self._handle_exception(e, SUMMARIZE_FALLBACK_ERROR)

        if len(summary) > max_length:
            return summary[: max_length - 3] + "..."
        return summary

    async def close(self) -> None:
        if self._client is None:
            return
        try:
            logger.info("Closing AI client")
            await self._client.aclose()
        except (OSError, RuntimeError):
            logger.exception("Failed to close AI client")
        else:
            logger.info("AI client closed successfully")
