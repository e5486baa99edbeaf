import asyncio
import json
import time
from typing import Any, Awaitable, Callable, Optional

import aiohttp
from pydantic import BaseModel

from summurai import http_client
from summurai.env import (
    openai_api_base_url,
    openai_api_key,
    openai_model,
    openai_request_timeout,
    summary_max_tokens,
    summary_temperature,
)
from summurai.errors import MissingCredentialError, SummarizationAPIError, SummarizationError
from summurai.logs import get_logger
from summurai.modules.monitoring import SUMMARY_DURATION_METRIC, SUMMARY_ERROR_COUNTER
from summurai.modules.summaries.prompts import build_user_prompt, summary_system

log = get_logger(__name__)

Transport = Callable[..., Awaitable[tuple[int, str]]]


class SummarizerConfig(BaseModel):
    api_key: Optional[str] = None
    base_url: str = 'https://api.openai.com/v1'
    model: str = 'gpt-4o-mini'
    max_tokens: int = 200
    temperature: float = 0.2
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> 'SummarizerConfig':
        return cls(
            api_key=openai_api_key or None,
            base_url=openai_api_base_url,
            model=openai_model,
            max_tokens=summary_max_tokens,
            temperature=summary_temperature,
            timeout=openai_request_timeout,
        )

    @property
    def completions_url(self) -> str:
        return f'{self.base_url.rstrip("/")}/chat/completions'


def get_reply(response: Any) -> str:
    """
    Reads the assistant reply from the first choice, preferring the chat
    ``message.content`` field over the legacy completion ``text`` field.
    """

    if not isinstance(response, dict):
        return ''

    choices = response.get('choices')
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ''

    choice = choices[0]
    message = choice.get('message')

    if isinstance(message, dict) and isinstance(message.get('content'), str):
        return message['content']

    if isinstance(choice.get('text'), str):
        return choice['text']

    return ''


class SummarizationClient:
    def __init__(self, config: SummarizerConfig, transport: Transport = http_client.post):
        self.config = config
        self.transport = transport

    def build_request(self, prompt: str, max_tokens: int | None = None) -> dict:
        return {
            'model': self.config.model,
            'messages': [
                {'role': 'system', 'content': summary_system},
                {'role': 'user', 'content': prompt},
            ],
            'max_tokens': max_tokens or self.config.max_tokens,
            'temperature': self.config.temperature,
        }

    async def summarize(self, text: str, context: str | None = None, max_tokens: int | None = None) -> str:
        if not text or not text.strip():
            return ''

        if not self.config.api_key:
            raise MissingCredentialError('OPENAI_API_KEY environment variable is not set')

        start = time.perf_counter()

        try:
            status, body = await self.transport(
                self.config.completions_url,
                headers={'Authorization': f'Bearer {self.config.api_key}'},
                json=self.build_request(build_user_prompt(text, context), max_tokens),
                timeout=self.config.timeout,
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            SUMMARY_ERROR_COUNTER.inc()
            raise SummarizationError(f'LLM API request failed: {str(e) or type(e).__name__}') from e
        finally:
            SUMMARY_DURATION_METRIC.observe(time.perf_counter() - start)

        if not 200 <= status < 300:
            SUMMARY_ERROR_COUNTER.inc()
            raise SummarizationAPIError(status, body)

        try:
            response = json.loads(body)
        except ValueError as e:
            SUMMARY_ERROR_COUNTER.inc()
            raise SummarizationAPIError(status, body) from e

        summary = get_reply(response).strip()
        log.info(f'Summarized {len(text)} characters into {len(summary)}')

        return summary


__all__ = ['SummarizationClient', 'SummarizerConfig', 'get_reply']
