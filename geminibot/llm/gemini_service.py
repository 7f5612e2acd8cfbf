"""
geminibot/llm/gemini_service.py

Gemini chat exchange with single-round tool calling.

One exchange per Discord message:
  1. send the prompt (plus the limit-condition suffix) in a fresh chat session
  2. if the first response asks for function calls, run them through the tool
     registry and send every result back in the same session
  3. return the text of the last response

Only one round of tool calls is honored; a function call in the second
response is reported as UnexpectedPartTypeError.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
import httpx
from google import genai
from google.auth import exceptions as auth_exceptions
from google.genai import errors as genai_errors
from google.genai import types

from .errors import ModelCallError, ModelTimeoutError
from .parts import expect_text, first_candidate_parts, function_calls
from .prompt import LIMIT_CONDITION_PROMPT, build_prompt
from .tools.registry import ToolEntry, execute_tool_call, get_gemini_tools

# https://cloud.google.com/vertex-ai/generative-ai/docs/learn/models
DEFAULT_MODEL_NAME = "gemini-1.5-flash-001"
DEFAULT_TEMPERATURE = 0.6
DEFAULT_MODEL_TIMEOUT_SECONDS = 60.0


def build_genai_client(project_id: str, location: str) -> genai.Client:
    """Vertex AI backed client; credentials come from Application Default Credentials."""
    return genai.Client(vertexai=True, project=project_id, location=location)


class GeminiExchange:
    def __init__(
        self,
        client: genai.Client,
        registry: dict[str, ToolEntry],
        model_name: str = DEFAULT_MODEL_NAME,
        temperature: float = DEFAULT_TEMPERATURE,
        limit_prompt: str = LIMIT_CONDITION_PROMPT,
        timeout: float = DEFAULT_MODEL_TIMEOUT_SECONDS,
    ):
        self.client = client
        self.registry = registry
        self.model_name = model_name
        self.limit_prompt = limit_prompt
        self.timeout = timeout
        self.config = types.GenerateContentConfig(
            temperature=temperature,
            tools=get_gemini_tools(registry) or None,
        )
        logging.info(
            "GeminiExchange: model=%s, temperature=%s, tools=%s",
            model_name, temperature, list(registry),
        )

    async def chat(self, prompt: str) -> str:
        session = self.client.aio.chats.create(model=self.model_name, config=self.config)

        resp = await self._send(session, build_prompt(prompt, self.limit_prompt), "text prompt")
        parts = first_candidate_parts(resp)

        calls = function_calls(parts)
        logging.info("GeminiExchange: function calls in first response: %d", len(calls))
        if not calls:
            return expect_text(parts[0])

        results = [await execute_tool_call(call, self.registry) for call in calls]
        logging.info(
            "GeminiExchange: function response length: %s",
            [len(r.content) for r in results],
        )

        resp2 = await self._send(session, [r.to_part() for r in results], "web content")
        return expect_text(first_candidate_parts(resp2)[0])

    async def _send(self, session: Any, message: Any, label: str) -> types.GenerateContentResponse:
        try:
            resp = await asyncio.wait_for(session.send_message(message), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise ModelTimeoutError(
                f"{label}: no response from {self.model_name} within {self.timeout}s"
            ) from e
        except (
            genai_errors.APIError,
            aiohttp.ClientError,
            httpx.HTTPError,
            auth_exceptions.GoogleAuthError,
        ) as e:
            raise ModelCallError(f"{label}: failed to call {self.model_name}: {e}") from e
        _log_usage(label, resp)
        return resp


def _log_usage(label: str, resp: types.GenerateContentResponse) -> None:
    usage = resp.usage_metadata
    if usage is None:
        return
    logging.info(
        "%s: request tokens=%s, response tokens=%s, total tokens=%s",
        label,
        usage.prompt_token_count,
        usage.candidates_token_count,
        usage.total_token_count,
    )
