"""
geminibot/llm/tools/registry.py

Single source of truth for ALL bot tools.
Each ToolEntry bundles: the Gemini function declaration and the coroutine that
runs when the model calls it.

Adding a new tool only requires:
  1. Create geminibot/llm/tools/my_tool.py  (declaration + implementation)
  2. Add a ToolEntry for it in build_tool_registry()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List

from google.genai import types

from ..errors import UnknownToolError
from ..parts import FunctionCallPart, ToolResult
from .web_fetch import FETCH_WEBSITE_CONTENT, WEB_FETCH_DECLARATION, WebFetcher, url_argument


# ── ToolEntry ─────────────────────────────────────────────────────────────────

@dataclass
class ToolEntry:
    declaration: types.FunctionDeclaration             # sent to the model
    fn: Callable[[dict[str, Any]], Awaitable[bytes]]   # awaited when the model calls this tool


# ── Registry builder ──────────────────────────────────────────────────────────

def build_tool_registry(fetcher: WebFetcher) -> dict[str, ToolEntry]:
    async def fetch_website_content(args: dict[str, Any]) -> bytes:
        return await fetcher.fetch(url_argument(args))

    return {
        FETCH_WEBSITE_CONTENT: ToolEntry(
            declaration=WEB_FETCH_DECLARATION,
            fn=fetch_website_content,
        ),
    }


# ── Gemini schema helper ──────────────────────────────────────────────────────

def get_gemini_tools(registry: dict[str, ToolEntry]) -> List[types.Tool]:
    """
    Return the tool list for GenerateContentConfig(tools=...).
    Empty when no tools are registered.
    """
    if not registry:
        return []
    return [types.Tool(function_declarations=[e.declaration for e in registry.values()])]


# ── Tool executor ─────────────────────────────────────────────────────────────

async def execute_tool_call(call: FunctionCallPart, registry: dict[str, ToolEntry]) -> ToolResult:
    """
    Execute a function call by name and wrap its output as a ToolResult.
    Tool failures propagate to the caller.
    """
    entry = registry.get(call.name)
    if entry is None:
        raise UnknownToolError(f"model requested unknown tool '{call.name}'")
    logging.info("execute_tool_call: '%s' args=%s", call.name, call.args)
    content = await entry.fn(call.args)
    return ToolResult(name=call.name, content=content)
