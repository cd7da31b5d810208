import asyncio
import logging
from typing import Optional, Sequence

from openai import OpenAI

from config import require_openai_api_key, settings
from services.errors import ModelCallFailedError
from services.ports import CompletionClient, Message

logger = logging.getLogger(__name__)


def get_openai_client(api_key: Optional[str] = None) -> OpenAI:
    """Get OpenAI client, raising when the key is missing or a placeholder."""
    try:
        key = api_key if api_key is not None else require_openai_api_key()
    except ValueError as exc:
        raise ModelCallFailedError(str(exc)) from exc
    if not key or "your_" in key or key == "test-key":
        raise ModelCallFailedError("OPENAI_API_KEY is not configured")
    return OpenAI(api_key=key)


class OpenAICompletionClient(CompletionClient):
    """Chat-completion adapter returning the raw text of a single choice."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        client: Optional[OpenAI] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or settings.OPENAI_MODEL
        self.max_tokens = max_tokens or settings.OPENAI_MAX_TOKENS
        self._client = client

    def _complete_sync(self, messages: Sequence[Message]) -> str:
        client = self._client or get_openai_client(self.api_key)
        response = client.chat.completions.create(
            model=self.model,
            messages=[dict(message) for message in messages],
            max_tokens=self.max_tokens,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ModelCallFailedError("Model returned an empty response")
        return content

    async def complete(self, messages: Sequence[Message]) -> str:
        try:
            return await asyncio.to_thread(self._complete_sync, messages)
        except ModelCallFailedError:
            raise
        except Exception as e:
            logger.error(f"Error in LLM completion: {e}")
            raise ModelCallFailedError(str(e) or e.__class__.__name__) from e
