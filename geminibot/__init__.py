"""
Top-level package for the Gemini Discord bot.

This package hosts:
- config loading, validation and startup settings
- Discord mention filtering and the message handler
- the Gemini chat exchange with single-round tool calling
- the fetchWebsiteContent tool and its registry
"""
