"""Infrastructure layer — input loading, diagram rendering, file output.

This layer depends on stdlib and third-party libs (pydantic, NetworkX) and
on the domain models it loads and exports. It must never import from
services, commands, or output.
"""
