"""SummaryService for turning a meeting transcript into an instructed summary.

The service issues exactly one chat completion per request and returns the
model's text untouched: no post-processing, no caching, no retry.
"""
import logging
from typing import Optional
from openai import AsyncOpenAI

from services.errors import ConfigurationError, GenerationError


logger = logging.getLogger(__name__)


class SummaryService:
    """Service for generating meeting summaries with OpenAI.

    The OpenAI client is created once from the given credential and reused
    across requests. When no credential is supplied the service still
    constructs, but every generation attempt raises ConfigurationError.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o",
        client: Optional[AsyncOpenAI] = None
    ):
        """Initialize the SummaryService.

        Args:
            api_key: OpenAI API key, or None when not configured
            model: Chat completion model name
            client: Pre-built client (tests inject a fake here)
        """
        self.model = model
        self.client = client
        if self.client is None and api_key:
            self.client = AsyncOpenAI(api_key=api_key)

        if self.client is None:
            logger.warning("SummaryService initialized without an OpenAI API key")
        else:
            logger.info(f"SummaryService initialized with model: {self.model}")

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def generate_summary(self, transcript: str, instruction: str) -> str:
        """Generate a summary of the transcript following the instruction.

        Args:
            transcript: Meeting transcript text
            instruction: Free-text directive for style and focus

        Returns:
            The completion text exactly as returned by the provider

        Raises:
            ConfigurationError: If no API key is configured
            GenerationError: If the provider call fails or returns no text
        """
        if not self.is_configured:
            logger.error("Summary requested but OPENAI_API_KEY is not configured")
            raise ConfigurationError("AI provider not configured")

        prompt = self.build_prompt(transcript, instruction)

        logger.info(
            f"Generating summary: model={self.model}, "
            f"transcript_length={len(transcript)} chars, "
            f"instruction_length={len(instruction)} chars"
        )

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "user", "content": prompt}
                ]
            )
            summary = completion.choices[0].message.content
        except Exception as e:
            logger.error(
                f"Summary generation failed: error={type(e).__name__}: {str(e)}",
                exc_info=True
            )
            raise GenerationError() from e

        if not isinstance(summary, str):
            logger.error(f"Completion returned no text content: model={self.model}")
            raise GenerationError()

        logger.info(f"Summary generated: summary_length={len(summary)} chars")
        return summary

    @staticmethod
    def build_prompt(transcript: str, instruction: str) -> str:
        """Compose the single prompt embedding transcript and instruction."""
        return (
            "Please analyze the following meeting transcript and provide a summary "
            "based on the given instruction.\n"
            "\n"
            "TRANSCRIPT:\n"
            f"{transcript}\n"
            "\n"
            "INSTRUCTION:\n"
            f"{instruction}\n"
            "\n"
            "Please provide a clear, well-structured summary that follows the "
            "instruction above.\n"
        )
