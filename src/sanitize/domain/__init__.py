"""Domain layer — rules, field descriptors, and errors.

This layer depends only on stdlib and pydantic.
It must never import from engine, transformers, config, or commands.
"""
