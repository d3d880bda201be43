"""Chat model HTTP client for the financial advisor"""

import httpx
from typing import Dict, List
from finx_gateway.domain.exceptions import ChatAPIError
from finx_gateway.config import settings
from finx_gateway.infrastructure.observability.metrics import chat_latency_histogram, chat_failure_counter


class ChatClient:
    """Client for an OpenAI-compatible chat completions API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.chat_api_base).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.chat_api_key
        self.model = model or settings.chat_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def complete(self, system_prompt: str, messages: List[Dict[str, str]]) -> str:
        """
        Send the conversation with the system prompt and return the reply text.

        The reply is passed through as-is; it is not parsed or validated.

        Raises:
            ChatAPIError: On timeout, HTTP errors, or a response without a reply
        """
        payload = {
            "model": self.model,
            "messages": [{"role": "system", "content": system_prompt}, *messages],
            "temperature": settings.chat_temperature,
            "max_tokens": settings.chat_max_tokens,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with chat_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/chat/completions",
                        json=payload,
                        headers=headers,
                    )
                response.raise_for_status()
                data = response.json()
                content = data["choices"][0]["message"]["content"]
                if not isinstance(content, str):
                    raise ValueError("empty content")
                return content

            except httpx.TimeoutException as e:
                chat_failure_counter.inc()
                raise ChatAPIError(f"Chat API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                chat_failure_counter.inc()
                raise ChatAPIError(f"Chat API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                chat_failure_counter.inc()
                raise ChatAPIError(f"Chat API unreachable: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError) as e:
                chat_failure_counter.inc()
                raise ChatAPIError(f"Invalid response from chat API: {e}") from e
