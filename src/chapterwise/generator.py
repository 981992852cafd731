"""Answer generation on top of an LLMClient."""

from chapterwise.exceptions import EmptyResponseError
from chapterwise.providers.base import LLMClient

DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 1000


class AnswerGenerator:
    """Sends prompt messages to an LLM with low temperature and a length cap."""

    def __init__(
        self,
        llm_client: LLMClient,
        temperature: float | None = DEFAULT_TEMPERATURE,
        max_tokens: int | None = DEFAULT_MAX_TOKENS,
    ) -> None:
        self._llm_client = llm_client
        self.temperature = temperature
        self.max_tokens = max_tokens

    @staticmethod
    def _clean(text: str | None) -> str:
        answer = (text or "").strip()
        if not answer:
            raise EmptyResponseError("Generation provider returned no text")
        return answer

    def generate(self, messages: list[dict]) -> str:
        """Generate an answer.

        Raises:
            ProviderError: If the provider call fails or times out.
            EmptyResponseError: If the provider returns blank text.
        """
        return self._clean(
            self._llm_client.complete(
                messages, temperature=self.temperature, max_tokens=self.max_tokens
            )
        )

    async def agenerate(self, messages: list[dict]) -> str:
        """Generate an answer (async)."""
        return self._clean(
            await self._llm_client.acomplete(
                messages, temperature=self.temperature, max_tokens=self.max_tokens
            )
        )
