"""Domain layer — names, source types, declaration matching, and filter rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
