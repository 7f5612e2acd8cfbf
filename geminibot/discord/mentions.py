from __future__ import annotations

import re
from typing import Iterable

# Discord user mention markup, e.g. "<@123456789012345678>".
MENTION_PATTERN = re.compile(r"<@[0-9]+>")


def is_addressed(mention_ids: Iterable[int], bot_user_id: int) -> bool:
    return any(uid == bot_user_id for uid in mention_ids)


def strip_mentions(content: str) -> str:
    return MENTION_PATTERN.sub("", content)


def extract_prompt(content: str, mention_ids: Iterable[int], bot_user_id: int) -> str | None:
    """
    Return the message text with all mention markup removed,
    or None when the bot itself was not mentioned.
    """
    if not is_addressed(mention_ids, bot_user_id):
        return None
    return strip_mentions(content)
