"""Domain layer — rule sets, the schema builder, the matcher and self-check.

This layer depends only on stdlib.
It must never import from services, config, output, or commands.
"""
