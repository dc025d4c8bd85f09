"""Infrastructure layer: reading import maps from disk.

It must never import from services, commands, or output.
"""
