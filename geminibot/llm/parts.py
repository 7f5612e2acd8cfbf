"""
geminibot/llm/parts.py

Provider-neutral view of Gemini response parts.

A response part is either plain text or a function call request; anything else
(inline data, executable code, thoughts without text, ...) is rejected with
UnexpectedPartTypeError instead of being treated as an empty answer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from google.genai import types

from .errors import EmptyResponseError, UnexpectedPartTypeError


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class FunctionCallPart:
    name: str
    args: dict[str, Any] = field(default_factory=dict)


Part = Union[TextPart, FunctionCallPart]


@dataclass(frozen=True)
class ToolResult:
    name: str
    content: bytes

    def to_part(self) -> types.Part:
        """Wrap the fetched bytes as a function response keyed by the tool name."""
        return types.Part(
            function_response=types.FunctionResponse(
                name=self.name,
                response={"content": self.content.decode("utf-8", errors="replace")},
            )
        )


def classify_part(part: types.Part) -> Part:
    if part.function_call is not None:
        return function_calls([part])[0]
    if part.text is not None:
        return TextPart(part.text)
    raise UnexpectedPartTypeError(f"unsupported response part: {part!r}")


def first_candidate_parts(response: types.GenerateContentResponse) -> list[types.Part]:
    """Return the parts of the first candidate, raising EmptyResponseError if there are none."""
    if not response.candidates:
        raise EmptyResponseError("empty response from model: no candidates")
    content = response.candidates[0].content
    if content is None or not content.parts:
        raise EmptyResponseError("empty response from model: first candidate has no parts")
    return list(content.parts)


def function_calls(parts: list[types.Part]) -> list[FunctionCallPart]:
    """Scan every part for function call requests, in order."""
    return [
        FunctionCallPart(name=p.function_call.name or "", args=dict(p.function_call.args or {}))
        for p in parts
        if p.function_call is not None
    ]


def expect_text(part: types.Part) -> str:
    classified = classify_part(part)
    if not isinstance(classified, TextPart):
        raise UnexpectedPartTypeError(f"expected a text part, got function call '{classified.name}'")
    return classified.text
