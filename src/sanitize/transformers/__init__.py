"""Transformer registry and built-in string transformers."""

from sanitize.transformers.registry import (
    DEFAULT_REGISTRY,
    Transformer,
    TransformerRegistry,
    lookup,
    new_registry,
    register,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "Transformer",
    "TransformerRegistry",
    "lookup",
    "new_registry",
    "register",
]
