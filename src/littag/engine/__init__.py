"""Engine layer — registry, resolver, validator, and the boundary.

Engine modules may import from domain. They must never import from
services, commands, output, or config.
"""
