from __future__ import annotations

from google.auth import exceptions as auth_exceptions
from google.genai import errors as genai_errors


class ExchangeError(Exception):
    """Base error for failures while turning a prompt into a reply."""


class ModelCallError(ExchangeError):
    """The call to the Gemini API itself failed."""


class ModelTimeoutError(ModelCallError):
    pass


class EmptyResponseError(ExchangeError):
    """The model answered without any usable candidate or part."""


class ArgumentTypeError(ExchangeError):
    """A tool call argument is missing or has the wrong type."""


class FetchError(ExchangeError):
    """The web fetch tool could not retrieve the page."""


class FetchTimeoutError(FetchError):
    pass


class BlockedURLError(FetchError):
    """The fetch target is not an allowed public http(s) address."""


class UnknownToolError(ExchangeError):
    """The model asked for a tool that is not registered."""


class UnexpectedPartTypeError(ExchangeError):
    """A response part is neither text nor a function call where one was expected."""


def parse_error_message(error: Exception) -> str:
    """
    Map raw exceptions into short, human-readable messages.
    Used for logs.

    A ModelCallError is described by the API or transport failure it wraps
    when that failure is a known kind (rate limit, auth, missing model,
    connection).
    """
    s, t = str(error), type(error).__name__
    if isinstance(error, ModelTimeoutError):
        return f"⏱️ Model Timeout: {s}"
    if isinstance(error, FetchTimeoutError):
        return f"⏱️ Fetch Timeout: {s}"
    if isinstance(error, BlockedURLError):
        return f"🚫 Blocked URL: {s}"
    if isinstance(error, ModelCallError) and error.__cause__ is not None:
        known = _describe_api_failure(error.__cause__)
        if known:
            return known
    if isinstance(error, ExchangeError):
        return f"❌ {t}: {s.split(chr(10))[0][:200]}"
    return _describe_api_failure(error) or f"❌ {t}: {s.split(chr(10))[0][:100]}"


def _describe_api_failure(error: BaseException) -> str | None:
    s, t = str(error), type(error).__name__
    code = error.code if isinstance(error, genai_errors.APIError) else None
    if code == 429 or "429" in s or "RESOURCE_EXHAUSTED" in s:
        return "⚠️ Rate Limited: Gemini API is temporarily rate-limited. Please retry shortly."
    if (
        code in (401, 403)
        or isinstance(error, auth_exceptions.GoogleAuthError)
        or "PERMISSION_DENIED" in s
    ):
        return "❌ Authentication Error: check the Google Cloud credentials and project."
    if code == 404 or "NOT_FOUND" in s:
        return "❌ Not Found: the requested model or resource was not found."
    if "Connect" in t or "ECONNREFUSED" in s or "ETIMEDOUT" in s:
        return "❌ Connection Error: Unable to connect to the API provider."
    return None
