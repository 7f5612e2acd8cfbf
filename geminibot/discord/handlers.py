from __future__ import annotations

import logging
from typing import Protocol

import discord

from geminibot.discord.mentions import extract_prompt
from geminibot.llm.errors import ExchangeError, parse_error_message


MAX_MESSAGE_LENGTH = 2000  # Discord limit for plain (non-embed) messages


class Exchange(Protocol):
    async def chat(self, prompt: str) -> str: ...


def split_reply(text: str, max_len: int = MAX_MESSAGE_LENGTH) -> list[str]:
    return [text[i:i + max_len] for i in range(0, len(text), max_len)] if text else []


class MessageHandler:
    """Glue between Discord message events and the Gemini exchange."""

    def __init__(self, exchange: Exchange):
        self.exchange = exchange

    async def on_message(self, message: discord.Message, bot_user: discord.abc.User) -> None:
        """
        Answer a message that mentions the bot.

        Exchange failures and typing failures are logged, not raised. An empty reply
        (including the one left by a failed exchange) is not sent, since Discord
        rejects empty messages; a warning is logged instead.
        """
        if message.author.bot:
            return
        prompt = extract_prompt(message.content, [u.id for u in message.mentions], bot_user.id)
        if prompt is None:
            return
        logging.info("sent prompt (uid:%s, channel:%s): %s", message.author.id, message.channel.id, prompt)

        reply = ""
        try:
            async with message.channel.typing():
                reply = await self.exchange.chat(prompt)
        except ExchangeError as e:
            logging.error("failed to call Gemini: %s", parse_error_message(e))
        except discord.HTTPException as e:
            logging.error("failed to show typing in channel %s: %s", message.channel.id, e)

        chunks = split_reply(reply)
        if not chunks:
            logging.warning("No reply for message %s, nothing sent", message.id)
            return
        for chunk in chunks:
            try:
                await message.channel.send(chunk)
            except discord.HTTPException as e:
                logging.error("failed to send reply to channel %s: %s", message.channel.id, e)
                return
