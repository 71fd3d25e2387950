"""Domain layer — values, frontmatter parsing, conditions, and queries.

This layer depends only on stdlib and pydantic and performs no I/O.
It must never import from services, infrastructure, commands, or config.
"""
