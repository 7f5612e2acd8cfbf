"""
Alternate entrypoint that delegates to the geminicord script.

Allows `python -m geminibot.main` and the `geminibot` console script
to run the bot.
"""

import asyncio

from geminicord import main as run_bot


def main() -> None:
    try:
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
