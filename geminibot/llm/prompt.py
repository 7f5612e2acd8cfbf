from __future__ import annotations

# Keeps the model's reply within a single Discord message and in plain text.
LIMIT_CONDITION_PROMPT = "返答は合計2000文字以内にしてください。また出力形式はプレーンテキストにしてください。"


def build_prompt(text: str, suffix: str = LIMIT_CONDITION_PROMPT) -> str:
    return text + suffix


def strip_limit_condition(prompt: str, suffix: str = LIMIT_CONDITION_PROMPT) -> str | None:
    """Return the user text of a prompt built by build_prompt, or None if the suffix is absent."""
    if not prompt.endswith(suffix):
        return None
    return prompt[: len(prompt) - len(suffix)]
