"""Domain layer: URL handling, import-map parsing, and specifier resolution.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
