"""OpenAI Responses API client for free-text completions."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from djq.services.enrichment import TextCompletionClient


@dataclass
class OpenAITextClient(TextCompletionClient):
    """Text completion client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout: float = 10.0) -> "OpenAITextClient":
        """Create an OpenAI client with a request timeout."""
        return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout))

    async def complete(self, *, model: str, prompt: str, store: bool) -> str:
        """Return the model's text output for a single prompt."""
        response = await self.client.responses.create(
            model=model,
            input=prompt,
            store=store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
