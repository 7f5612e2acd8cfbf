import unittest
from unittest.mock import AsyncMock, MagicMock

from google.genai import types

from geminibot.llm.errors import ArgumentTypeError, UnexpectedPartTypeError, UnknownToolError
from geminibot.llm.parts import FunctionCallPart, TextPart, ToolResult, classify_part
from geminibot.llm.tools import (
    FETCH_WEBSITE_CONTENT,
    build_tool_registry,
    execute_tool_call,
    get_gemini_tools,
)


class TestParts(unittest.TestCase):
    def test_text_part(self):
        self.assertEqual(classify_part(types.Part(text="hello")), TextPart("hello"))

    def test_function_call_part(self):
        part = types.Part(function_call=types.FunctionCall(name="f", args={"url": "u"}))
        self.assertEqual(classify_part(part), FunctionCallPart("f", {"url": "u"}))

    def test_function_call_without_args(self):
        part = types.Part(function_call=types.FunctionCall(name="f"))
        self.assertEqual(classify_part(part), FunctionCallPart("f", {}))

    def test_other_parts_rejected(self):
        with self.assertRaises(UnexpectedPartTypeError):
            classify_part(types.Part())

    def test_tool_result_part(self):
        part = ToolResult(FETCH_WEBSITE_CONTENT, "ページ".encode() + b"\xff").to_part()
        self.assertEqual(part.function_response.name, FETCH_WEBSITE_CONTENT)
        self.assertEqual(part.function_response.response, {"content": "ページ\ufffd"})


class TestToolRegistry(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.fetcher = MagicMock()
        self.fetcher.fetch = AsyncMock(return_value=b"PAGE")
        self.registry = build_tool_registry(self.fetcher)

    def test_gemini_tools(self):
        tools = get_gemini_tools(self.registry)
        self.assertEqual(len(tools), 1)
        declaration = tools[0].function_declarations[0]
        self.assertEqual(declaration.name, FETCH_WEBSITE_CONTENT)
        self.assertIn("url", declaration.parameters.properties)
        self.assertEqual(declaration.parameters.required, ["url"])

    def test_no_tools(self):
        self.assertEqual(get_gemini_tools({}), [])

    async def test_execute_fetch(self):
        result = await execute_tool_call(
            FunctionCallPart(FETCH_WEBSITE_CONTENT, {"url": "http://example.test"}), self.registry
        )
        self.assertEqual(result, ToolResult(FETCH_WEBSITE_CONTENT, b"PAGE"))
        self.fetcher.fetch.assert_awaited_once_with("http://example.test")

    async def test_execute_unknown_tool(self):
        with self.assertRaises(UnknownToolError):
            await execute_tool_call(FunctionCallPart("doStuff", {}), self.registry)
        self.fetcher.fetch.assert_not_awaited()

    async def test_execute_bad_argument(self):
        with self.assertRaises(ArgumentTypeError):
            await execute_tool_call(FunctionCallPart(FETCH_WEBSITE_CONTENT, {"uri": "x"}), self.registry)
        self.fetcher.fetch.assert_not_awaited()


if __name__ == "__main__":
    unittest.main()
