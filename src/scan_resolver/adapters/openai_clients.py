"""OpenAI Responses API clients for label transcription and product analysis."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from scan_resolver.services.inference import InferenceClient
from scan_resolver.services.text_extraction import VisionClient

ANALYSIS_SCHEMA_NAME = "product_analysis"


def _structured_request(  # noqa: PLR0913
    *,
    model: str,
    content: list[dict[str, str]],
    schema_name: str,
    schema: dict[str, object],
    store: bool,
    reasoning_effort: str | None,
    instructions: str | None = None,
) -> dict[str, object]:
    payload: dict[str, object] = {
        "model": model,
        "input": [{"role": "user", "content": content}],
        "text": {
            "format": {
                "type": "json_schema",
                "name": schema_name,
                "strict": True,
                "schema": schema,
            }
        },
        "store": store,
    }
    if instructions is not None:
        payload["instructions"] = instructions
    if reasoning_effort:
        payload["reasoning"] = {"effort": reasoning_effort}
    return payload


async def _create_json(client: AsyncOpenAI, payload: dict[str, object]) -> dict[str, object]:
    response = await client.responses.create(**payload)
    if not response.output_text:
        raise RuntimeError("OpenAI returned an empty response")
    return json.loads(response.output_text)


@dataclass
class OpenAIVisionClient(VisionClient):
    """Reads label images through the Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Send the prompt and image and parse the structured transcription."""
        payload = _structured_request(
            model=model,
            content=[
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": image_data_url},
            ],
            schema_name=schema_name,
            schema=schema,
            store=store,
            reasoning_effort=reasoning_effort,
        )
        return await _create_json(self.client, payload)

    async def close(self) -> None:
        await self.client.close()


@dataclass
class OpenAIInferenceClient(InferenceClient):
    """Analyzes product text through the Responses API; never sends images."""

    client: AsyncOpenAI
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, reasoning_effort: str | None = None, store: bool = False
    ) -> "OpenAIInferenceClient":
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def analyze(
        self,
        *,
        model: str,
        instructions: str,
        message: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        payload = _structured_request(
            model=model,
            content=[{"type": "input_text", "text": message}],
            schema_name=ANALYSIS_SCHEMA_NAME,
            schema=schema,
            store=self.store,
            reasoning_effort=self.reasoning_effort,
            instructions=instructions,
        )
        return await _create_json(self.client, payload)

    async def close(self) -> None:
        await self.client.close()
