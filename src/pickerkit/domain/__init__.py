"""Domain layer — temporal value types, parsing, and comparison rules.

This layer depends only on stdlib and pydantic.
It must never import from engine, pickers, infrastructure, commands, or config.
"""
