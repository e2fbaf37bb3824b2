"""Transformer registry — rule name -> transformer function.

:data:`DEFAULT_REGISTRY` is process-wide and is populated with the
built-in string transformers at import time. It has no locking:
register everything once at startup, before any concurrent ``apply()``
calls begin. Use :func:`new_registry` for an independent vocabulary.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import TypeAlias, overload

from sanitize.domain.fields import FieldHandle

logger = logging.getLogger(__name__)

Transformer: TypeAlias = Callable[[FieldHandle, str, str], None]
"""``(field, rule_name, rule_arg) -> None``; raise to signal failure."""


class TransformerRegistry:
    """Mapping of rule names to transformers. Last registration wins."""

    def __init__(self, transformers: Mapping[str, Transformer] | None = None) -> None:
        self._transformers: dict[str, Transformer] = dict(transformers or {})

    @overload
    def register(self, name: str, transformer: Transformer) -> Transformer: ...

    @overload
    def register(self, name: str) -> Callable[[Transformer], Transformer]: ...

    def register(
        self, name: str, transformer: Transformer | None = None
    ) -> Transformer | Callable[[Transformer], Transformer]:
        """Register *transformer* under *name*, replacing any existing entry.

        Without *transformer*, returns a decorator::

            @registry.register("slugify")
            def slugify(field, rule_name, rule_arg): ...
        """
        if transformer is None:

            def decorator(fn: Transformer) -> Transformer:
                self.register(name, fn)
                return fn

            return decorator

        if name in self._transformers:
            logger.debug("Overwriting transformer for rule %r", name)
        self._transformers[name] = transformer
        return transformer

    def lookup(self, name: str) -> Transformer | None:
        """Return the transformer for *name*, or None if unregistered."""
        return self._transformers.get(name)

    def names(self) -> list[str]:
        """Registered rule names, sorted."""
        return sorted(self._transformers)

    def copy(self) -> TransformerRegistry:
        return TransformerRegistry(self._transformers)

    def __contains__(self, name: object) -> bool:
        return name in self._transformers

    def __iter__(self) -> Iterator[str]:
        return iter(self._transformers)

    def __len__(self) -> int:
        return len(self._transformers)


def new_registry(*, builtins: bool = True) -> TransformerRegistry:
    """Create an independent registry, optionally seeded with the built-ins."""
    from sanitize.transformers.strings import BUILTIN_TRANSFORMERS

    return TransformerRegistry(BUILTIN_TRANSFORMERS if builtins else None)


DEFAULT_REGISTRY: TransformerRegistry = new_registry()


def register(name: str, transformer: Transformer) -> None:
    """Register *transformer* on the process-wide :data:`DEFAULT_REGISTRY`."""
    DEFAULT_REGISTRY.register(name, transformer)


def lookup(name: str) -> Transformer | None:
    """Look up *name* on the process-wide :data:`DEFAULT_REGISTRY`."""
    return DEFAULT_REGISTRY.lookup(name)
