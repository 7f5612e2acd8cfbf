import asyncio
import logging
import os
import sys

import discord
import httpx

from geminibot.config.loader import get_config, resolve_project_id
from geminibot.config.settings import BotSettings
from geminibot.config.validator import ConfigValidationError
from geminibot.discord.handlers import MessageHandler
from geminibot.llm.gemini_service import GeminiExchange, build_genai_client
from geminibot.llm.tools import WebFetcher, build_tool_registry

if os.environ.get("DEBUG"):
    logging.basicConfig(level=logging.DEBUG)
    logging.getLogger("httpx").setLevel(logging.DEBUG)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")


def load_settings() -> BotSettings:
    config = get_config()
    project_id = resolve_project_id((config.get("google") or {}).get("project_id"))
    try:
        settings = BotSettings.from_config(config, project_id=project_id)
    except ConfigValidationError as e:
        logging.error("Invalid configuration: %s", e)
        sys.exit(1)
    logging.info(
        f"configuration (project: {settings.project_id}, location: {settings.location}, model: {settings.model_name})"
    )
    return settings


def build_exchange(settings: BotSettings, http_client: httpx.AsyncClient) -> GeminiExchange:
    fetcher = WebFetcher(
        http_client,
        timeout=settings.fetch_timeout,
        max_bytes=settings.fetch_max_bytes,
        max_redirects=settings.fetch_max_redirects,
        allow_private_networks=settings.allow_private_networks,
    )
    return GeminiExchange(
        build_genai_client(settings.project_id, settings.location),
        build_tool_registry(fetcher),
        model_name=settings.model_name,
        temperature=settings.temperature,
        limit_prompt=settings.limit_prompt,
        timeout=settings.model_timeout,
    )


def build_discord_client(settings: BotSettings, handler: MessageHandler) -> discord.Client:
    intents = discord.Intents.default()
    intents.message_content = True
    activity = discord.CustomActivity(name=settings.status_message[:128]) if settings.status_message else None
    discord_bot = discord.Client(intents=intents, activity=activity)

    @discord_bot.event
    async def on_ready() -> None:
        logging.info(f"Logged in as {discord_bot.user} (id: {discord_bot.user.id})")

    @discord_bot.event
    async def on_message(new_msg: discord.Message) -> None:
        await handler.on_message(new_msg, discord_bot.user)

    return discord_bot


async def main() -> None:
    logging.info("starting Gemini discord bot")
    settings = load_settings()
    async with httpx.AsyncClient() as http_client:
        logging.info("create Gemini instance")
        handler = MessageHandler(build_exchange(settings, http_client))
        logging.info("starting discord connection")
        discord_bot = build_discord_client(settings, handler)
        try:
            async with discord_bot:
                await discord_bot.start(settings.bot_token)
        finally:
            logging.info("closing discord connection")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
