"""Domain layer — numbers, units, quantities, and the conversion engine.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
