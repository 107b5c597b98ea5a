"""Astro AI LangChain tool registry."""

from astro_ai.tools.astro import astro_ai

ALL_TOOLS = [astro_ai]

__all__ = ["ALL_TOOLS"]
