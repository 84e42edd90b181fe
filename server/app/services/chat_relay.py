# app/services/chat_relay.py
import codecs
import json
import logging
import math
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx
from fastapi.responses import JSONResponse, StreamingResponse

from app.config import Settings
from app.errors import ServerConfigError, UpstreamProviderError
from app.models.chat import ChatRequest
from app.services.conversation import truncate_messages

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def _delta_content(event: Any) -> Optional[str]:
    """choices[0].delta.content of a streamed completion chunk, if present."""
    if not isinstance(event, dict):
        return None
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    delta = choices[0].get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None


def _upstream_error_message(error_data: Any) -> str:
    if isinstance(error_data, dict):
        error = error_data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return "OpenAI API error"


class UsageMeter:
    """
    Approximate output-token counter fed with the raw event-stream bytes.

    Text is decoded incrementally and buffered only up to the next newline so
    `data:` lines split across chunks are still counted once. A delta is
    estimated at one token per four characters. Lines that are not valid JSON
    are ignored.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self.estimated_tokens = 0
        self.events = 0
        self.completed = False

    def feed(self, chunk: bytes) -> None:
        self._pending += self._decoder.decode(chunk)
        *lines, self._pending = self._pending.split("\n")
        for line in lines:
            self._consume(line)

    def flush(self) -> None:
        tail = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        if tail:
            self._consume(tail)

    def _consume(self, line: str) -> None:
        line = line.strip()
        if not line.startswith("data:"):
            return
        data = line[len("data:"):].strip()
        if data == DONE_SENTINEL:
            self.completed = True
            return
        try:
            event = json.loads(data)
        except ValueError:
            return
        self.events += 1
        content = _delta_content(event)
        if content:
            self.estimated_tokens += math.ceil(len(content) / 4)


class ChatRelay:
    """Forwards one chat request to the completion API and relays the answer back."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        # no in-core timeout: a streamed answer may legitimately take a long time
        return httpx.AsyncClient(transport=self._transport, timeout=None)

    def _payload(self, request: ChatRequest, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "model": self.settings.openai_model,
            "messages": messages,
            "temperature": request.temperature,
            "max_tokens": request.maxTokens,
            "stream": request.stream,
        }

    async def relay(self, request: ChatRequest):
        if not self.settings.openai_api_key:
            logger.error("OPENAI_API_KEY not configured on server")
            raise ServerConfigError("API key not configured")

        optimized_messages = truncate_messages(request.messages)
        logger.info(
            f"[Token Optimization] Messages sent: {len(optimized_messages)} "
            f"(truncated from {len(request.messages)})"
        )
        logger.info(
            f"[Cost Tracking] Model: {self.settings.openai_model}, "
            f"Max Tokens: {request.maxTokens}, Temperature: {request.temperature}"
        )

        client = self._client()
        upstream_request = client.build_request(
            "POST",
            self.settings.chat_completions_url,
            json=self._payload(request, optimized_messages),
            headers={"Authorization": f"Bearer {self.settings.openai_api_key}"},
        )
        try:
            upstream = await client.send(upstream_request, stream=True)
        except httpx.HTTPError as e:
            await client.aclose()
            logger.error(f"Server error: {e}")
            raise UpstreamProviderError(500, "Internal server error")

        if not upstream.is_success:
            await self._raise_upstream_error(upstream, client)

        if request.stream:
            return StreamingResponse(
                self._stream_body(upstream, client),
                media_type="text/event-stream",
                headers=SSE_HEADERS,
            )
        return await self._json_body(upstream, client)

    async def _raise_upstream_error(self, upstream: httpx.Response, client: httpx.AsyncClient):
        error_data: Any = {}
        try:
            await upstream.aread()
            error_data = upstream.json()
        except (httpx.HTTPError, ValueError):
            error_data = {}
        finally:
            await upstream.aclose()
            await client.aclose()
        logger.error(f"OpenAI API error ({upstream.status_code}): {error_data}")
        raise UpstreamProviderError(upstream.status_code, _upstream_error_message(error_data))

    async def _json_body(self, upstream: httpx.Response, client: httpx.AsyncClient) -> JSONResponse:
        try:
            await upstream.aread()
            data = upstream.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Server error: {e}")
            raise UpstreamProviderError(500, "Internal server error")
        finally:
            await upstream.aclose()
            await client.aclose()

        self._log_usage(data)
        return JSONResponse(content=data)

    def _log_usage(self, data: Any) -> None:
        usage = data.get("usage") if isinstance(data, dict) else None
        if not isinstance(usage, dict):
            return
        prompt_tokens = usage.get("prompt_tokens") or 0
        completion_tokens = usage.get("completion_tokens") or 0
        logger.info(
            f"[Token Usage] Prompt: {prompt_tokens}, Completion: {completion_tokens}, "
            f"Total: {usage.get('total_tokens')}"
        )
        cost = (
            prompt_tokens * self.settings.prompt_token_price
            + completion_tokens * self.settings.completion_token_price
        )
        logger.info(f"[Cost Estimate] ~${cost:.6f}")

    async def _stream_body(self, upstream: httpx.Response, client: httpx.AsyncClient) -> AsyncIterator[bytes]:
        """
        Yield upstream chunks unchanged, in order, as soon as they arrive.

        Headers are already sent once this runs, so a read failure only ends the
        stream. The upstream connection is released on completion, on failure and
        when the caller goes away (the generator is closed).
        """
        meter = UsageMeter()
        try:
            async for chunk in upstream.aiter_bytes():
                meter.feed(chunk)
                yield chunk
            meter.flush()
            logger.info(
                f"[Token Usage] Estimated output tokens: ~{meter.estimated_tokens} "
                f"across {meter.events} events"
            )
            if not meter.completed:
                logger.warning("[Token Usage] Stream completed without [DONE]")
        except (httpx.HTTPError, httpx.StreamError) as e:
            logger.error(f"Streaming error: {e}")
        finally:
            await upstream.aclose()
            await client.aclose()
