"""OpenAI Responses API client for nutrition recommendations."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_track.services.recommendations import RecommendationClient


@dataclass
class OpenAIRecommendationClient(RecommendationClient):
    """Recommendation client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIRecommendationClient":
        """Create an OpenAI recommendation client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(self, *, model: str, prompt: str) -> str:
        """Call OpenAI Responses API with a plain text prompt."""
        response = await self.client.responses.create(
            model=model,
            input=prompt,
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text.strip()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
