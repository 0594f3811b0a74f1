"""Infrastructure layer — loading the static unit definition table.

This layer depends on stdlib and third-party libs (Pydantic, tomllib).
It builds domain objects but must never import from services, commands,
or output.
"""
