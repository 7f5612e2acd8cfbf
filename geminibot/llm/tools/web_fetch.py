"""
geminibot/llm/tools/web_fetch.py

The fetchWebsiteContent tool: lets the model read the page behind a URL that
appears in the user's prompt.

The URL comes straight from the model's function call, which in turn is driven
by user text, so every target (and every redirect hop) is checked before a
request goes out:
- only http/https URLs with a host
- unless allow_private_networks is set, every resolved address must be
  globally routable (no loopback, private, link-local, reserved or multicast)
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from typing import Any

import httpx
from google.genai import types

from ..errors import ArgumentTypeError, BlockedURLError, FetchError, FetchTimeoutError


FETCH_WEBSITE_CONTENT = "fetchWebsiteContent"

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_MAX_BYTES = 1_000_000
DEFAULT_MAX_REDIRECTS = 5


# ── Declaration ───────────────────────────────────────────────────────────────

WEB_FETCH_DECLARATION = types.FunctionDeclaration(
    name=FETCH_WEBSITE_CONTENT,
    description="プロンプト中で指定されたURLにあるページの内容を取得する関数",
    parameters=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "url": types.Schema(
                type=types.Type.STRING,
                description="ページの内容を取得したいURL",
            ),
        },
        required=["url"],
    ),
)


def url_argument(args: dict[str, Any]) -> str:
    url = args.get("url")
    if not isinstance(url, str):
        raise ArgumentTypeError(f"failed to convert URL data: {url!r}")
    return url


# ── Address checks ────────────────────────────────────────────────────────────

def is_public_address(address: str) -> bool:
    ip = ipaddress.ip_address(address)
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return ip.is_global and not ip.is_multicast


async def _resolve(host: str, port: int) -> list[str]:
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise FetchError(f"failed to resolve host {host!r}: {e}") from e
    return sorted({info[4][0] for info in infos})


# ── Fetcher ───────────────────────────────────────────────────────────────────

class WebFetcher:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_bytes: int = DEFAULT_MAX_BYTES,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        allow_private_networks: bool = False,
    ):
        """
        http_client            — shared httpx.AsyncClient (owned by the caller)
        timeout                — deadline in seconds for the whole fetch, redirects included
        max_bytes              — response bodies are truncated to this size
        max_redirects          — redirect hops followed before giving up
        allow_private_networks — skip the public-address check (local development only)
        """
        self.http_client = http_client
        self.timeout = timeout
        self.max_bytes = max_bytes
        self.max_redirects = max_redirects
        self.allow_private_networks = allow_private_networks

    async def check_url(self, url: str) -> httpx.URL:
        """Parse and validate a fetch target, raising BlockedURLError if it is not allowed."""
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise BlockedURLError(f"invalid URL {url!r}: {e}") from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise BlockedURLError(f"only absolute http(s) URLs can be fetched: {url!r}")
        if self.allow_private_networks:
            return parsed

        host = parsed.host
        try:
            addresses = [str(ipaddress.ip_address(host))]
        except ValueError:
            port = parsed.port or (443 if parsed.scheme == "https" else 80)
            addresses = await _resolve(host, port)
        for address in addresses:
            if not is_public_address(address):
                raise BlockedURLError(f"{host} resolves to non-public address {address}")
        return parsed

    async def fetch(self, url: str) -> bytes:
        try:
            return await asyncio.wait_for(self._fetch(url), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(f"fetching {url} took longer than {self.timeout}s") from e

    async def _fetch(self, url: str) -> bytes:
        target = await self.check_url(url)
        for _ in range(self.max_redirects + 1):
            try:
                async with self.http_client.stream(
                    "GET", target, follow_redirects=False, timeout=self.timeout
                ) as response:
                    if response.is_redirect:
                        location = response.headers["location"]
                        logging.info("WebFetcher: %s redirected to %s", target, location)
                        target = await self.check_url(str(target.join(location)))
                        continue
                    response.raise_for_status()
                    return await self._read_body(response)
            except httpx.TimeoutException as e:
                raise FetchTimeoutError(f"GET {target} timed out: {e}") from e
            except httpx.HTTPStatusError as e:
                raise FetchError(f"GET {target} returned status {e.response.status_code}") from e
            except httpx.HTTPError as e:
                raise FetchError(f"GET {target} failed: {e}") from e
        raise FetchError(f"too many redirects while fetching {url}")

    async def _read_body(self, response: httpx.Response) -> bytes:
        chunks: list[bytes] = []
        size = 0
        async for chunk in response.aiter_bytes():
            if size + len(chunk) > self.max_bytes:
                chunks.append(chunk[: self.max_bytes - size])
                logging.info("WebFetcher: %s truncated to %d bytes", response.url, self.max_bytes)
                break
            chunks.append(chunk)
            size += len(chunk)
        return b"".join(chunks)
