from typing import AsyncGenerator

import openai

from ..interfaces.chat_model import ChatModel, ModelNotConfiguredError
from ..models.prompt import ChatPrompt
from ...log import log


class OpenRouterChatModel(ChatModel):
    """
    ChatModel backed by OpenRouter's OpenAI-compatible chat completions API.

    A fresh AsyncOpenAI client is opened for every call and closed when the
    call (or the stream) finishes, so no connection outlives its request.
    """

    def __init__(self, api_key: str, base_url: str, model: str):
        if not api_key:
            raise ModelNotConfiguredError("OPENROUTER_API_KEY is not set")
        self.api_key = api_key
        self.base_url = base_url
        self.model = model

    def _client(self) -> openai.AsyncOpenAI:
        # no retries: every upstream failure is terminal for the request
        return openai.AsyncOpenAI(api_key=self.api_key, base_url=self.base_url, max_retries=0)

    async def complete(self, prompt: ChatPrompt) -> str:
        async with self._client() as client:
            log().debug(f"Requesting completion from {self.model}")
            response = await client.chat.completions.create(
                model=self.model,
                messages=prompt.to_messages(),
            )
        return response.choices[0].message.content or ""

    async def stream(self, prompt: ChatPrompt) -> AsyncGenerator[str, None]:
        async with self._client() as client:
            log().debug(f"Opening stream from {self.model}")
            response = await client.chat.completions.create(
                model=self.model,
                messages=prompt.to_messages(),
                stream=True,
            )
            async for chunk in response:
                if not chunk.choices:
                    continue
                text = chunk.choices[0].delta.content
                if text:
                    yield text
