from pydantic import BaseModel, ConfigDict, Field, field_validator

from inkpost.configs.settings import MAX_PROMPT_LENGTH, MAX_SUMMARY_SOURCE_LENGTH, settings


class GenerateRequest(BaseModel):
    """Prompt for a full AI-drafted post."""

    prompt: str = Field(
        ...,
        min_length=1,
        max_length=MAX_PROMPT_LENGTH,
        description="What the post should be about",
        examples=["An introduction to goroutines for Python developers"],
    )

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        if not v.strip():
            mssg = "Please enter a prompt to generate content"
            raise ValueError(mssg)
        return v.strip()


class GeneratedPost(BaseModel):
    """Structured output of the generation model."""

    title: str = Field(default="", description="A catchy and engaging blog post title")
    content: str = Field(
        default="",
        description="The full blog post content, at least 300 words, Markdown paragraphs",
    )
    excerpt: str = Field(default="", description="1-2 sentence summary, max 150 characters")
    tags: list[str] = Field(default_factory=list, description="3-5 relevant tags")


class SummarizeRequest(BaseModel):
    """Text to summarize, usually a post's content."""

    content: str = Field(..., max_length=MAX_SUMMARY_SOURCE_LENGTH)
    max_length: int = Field(
        default=settings.SUMMARY_MAX_LENGTH,
        ge=20,
        le=2000,
        alias="maxLength",
    )

    model_config = ConfigDict(populate_by_name=True)


class SummaryResponse(BaseModel):
    summary: str
