"""Domain layer — records, filtering, graph construction, neighbor views.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
