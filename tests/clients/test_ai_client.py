from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from orjson import dumps

from inkpost.clients.ai_client import (
    UNTITLED_POST,
    AiClient,
    strip_code_fences,
    to_generated_post,
)
from inkpost.errors import (
    AiAuthenticationError,
    AiError,
    AiInvalidInputError,
    AiModelNotFoundError,
    AiNotConfiguredError,
    AiResponseError,
)


@pytest.fixture
def ai_client_instance() -> AiClient:
    with patch("inkpost.clients.ai_client.Client") as mock_client:
        mock_client.return_value.aio = AsyncMock()
        return AiClient(api_key="fake-api-key", model="gemini-test")


def set_response(client: AiClient, text: str | None) -> AsyncMock:
    generate = client.client.models.generate_content
    generate.return_value = MagicMock(text=text)
    return generate


class TestStripCodeFences:
    def test_json_fence(self) -> None:
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self) -> None:
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self) -> None:
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


class TestToGeneratedPost:
    def test_missing_fields_are_defaulted(self) -> None:
        post = to_generated_post({"content": "Body text"})

        assert post.title == UNTITLED_POST
        assert post.excerpt == "Body text..."
        assert post.tags == []

    def test_non_list_tags_dropped(self) -> None:
        assert to_generated_post({"title": "T", "tags": "go"}).tags == []

    def test_non_object_rejected(self) -> None:
        with pytest.raises(AiResponseError):
            to_generated_post(["not", "an", "object"])


class TestConfiguration:
    def test_without_key_is_not_configured(self) -> None:
        client = AiClient(api_key="")

        assert client.is_configured is False
        with pytest.raises(AiNotConfiguredError):
            _ = client.client

    @pytest.mark.asyncio
    async def test_generate_without_key_raises(self) -> None:
        with pytest.raises(AiNotConfiguredError) as exc_info:
            await AiClient(api_key="").generate_post("Go basics")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_summarize_without_key_raises(self) -> None:
        with pytest.raises(AiNotConfiguredError):
            await AiClient(api_key="").summarize("text")

    def test_model_name(self, ai_client_instance: AiClient) -> None:
        assert ai_client_instance.model_name == "gemini-test"
        assert ai_client_instance.is_configured is True


class TestGeneratePost:
    @pytest.mark.asyncio
    async def test_success(self, ai_client_instance: AiClient) -> None:
        payload = {
            "title": "Goroutines",
            "content": "Long body",
            "excerpt": "Short",
            "tags": ["go", "concurrency"],
        }
        generate = set_response(ai_client_instance, dumps(payload).decode())

        result = await ai_client_instance.generate_post("Go concurrency")

        assert result.title == "Goroutines"
        assert result.tags == ["go", "concurrency"]
        kwargs = generate.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "User prompt: Go concurrency"
        assert kwargs["config"].response_mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_fenced_output_is_accepted(self, ai_client_instance: AiClient) -> None:
        set_response(ai_client_instance, '```json\n{"title": "Fenced", "content": "C"}\n```')

        result = await ai_client_instance.generate_post("anything")

        assert result.title == "Fenced"

    @pytest.mark.asyncio
    async def test_invalid_json(self, ai_client_instance: AiClient) -> None:
        set_response(ai_client_instance, "Sure! Here is your post...")

        with pytest.raises(AiResponseError) as exc_info:
            await ai_client_instance.generate_post("anything")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_empty_response(self, ai_client_instance: AiClient) -> None:
        set_response(ai_client_instance, None)

        with pytest.raises(AiResponseError):
            await ai_client_instance.generate_post("anything")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("404 models/gemini-test is not found", AiModelNotFoundError),
            ("API key not valid. Please pass a valid API key.", AiAuthenticationError),
        ],
    )
    async def test_upstream_errors_are_mapped(
        self,
        ai_client_instance: AiClient,
        message: str,
        expected: type[AiError],
    ) -> None:
        ai_client_instance.client.models.generate_content.side_effect = RuntimeError(message)

        with pytest.raises(expected):
            await ai_client_instance.generate_post("anything")

    @pytest.mark.asyncio
    async def test_other_errors_keep_their_message(self, ai_client_instance: AiClient) -> None:
        ai_client_instance.client.models.generate_content.side_effect = RuntimeError("quota exhausted")

        with pytest.raises(AiError) as exc_info:
            await ai_client_instance.generate_post("anything")

        assert type(exc_info.value) is AiError
        assert exc_info.value.detail == "quota exhausted"

    @pytest.mark.asyncio
    async def test_blank_error_message_uses_fallback(self, ai_client_instance: AiClient) -> None:
        ai_client_instance.client.models.generate_content.side_effect = RuntimeError()

        with pytest.raises(AiError) as exc_info:
            await ai_client_instance.generate_post("anything")

        assert exc_info.value.detail == "Failed to generate post content. Please try again."


class TestSummarize:
    @pytest.mark.asyncio
    async def test_success(self, ai_client_instance: AiClient) -> None:
        generate = set_response(ai_client_instance, "  A short summary.  ")

        summary = await ai_client_instance.summarize("Some long post", max_length=200)

        assert summary == "A short summary."
        assert "Some long post" in generate.call_args.kwargs["contents"]

    @pytest.mark.asyncio
    async def test_long_summary_is_truncated(self, ai_client_instance: AiClient) -> None:
        set_response(ai_client_instance, "x" * 50)

        summary = await ai_client_instance.summarize("content", max_length=20)

        assert summary == "x" * 17 + "..."
        assert len(summary) == 20

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, ai_client_instance: AiClient) -> None:
        with pytest.raises(AiInvalidInputError) as exc_info:
            await ai_client_instance.summarize("   ")

        assert exc_info.value.status_code == 400
        ai_client_instance.client.models.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_upstream_error(self, ai_client_instance: AiClient) -> None:
        ai_client_instance.client.models.generate_content.side_effect = RuntimeError("")

        with pytest.raises(AiError) as exc_info:
            await ai_client_instance.summarize("content")

        assert exc_info.value.detail == "Failed to summarize post. Please try again."


@pytest.mark.asyncio
async def test_close_closes_underlying_client(ai_client_instance: AiClient) -> None:
    await ai_client_instance.close()

    ai_client_instance.client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_without_key_is_noop() -> None:
    await AiClient(api_key="").close()
