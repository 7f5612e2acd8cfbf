from .registry import (
    build_tool_registry,
    execute_tool_call,
    get_gemini_tools,
    ToolEntry,
)
from .web_fetch import FETCH_WEBSITE_CONTENT, WEB_FETCH_DECLARATION, WebFetcher, url_argument

__all__ = [
    "build_tool_registry",
    "execute_tool_call",
    "get_gemini_tools",
    "ToolEntry",
    "FETCH_WEBSITE_CONTENT",
    "WEB_FETCH_DECLARATION",
    "WebFetcher",
    "url_argument",
]
