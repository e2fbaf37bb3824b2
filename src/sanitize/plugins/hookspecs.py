"""Pluggy hook specifications for sanitize plugins.

A single setup-time hook lets plugins contribute named transformers to
a registry before any record is sanitized.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from sanitize.transformers.registry import Transformer

hookspec = pluggy.HookspecMarker("sanitize")
hookimpl = pluggy.HookimplMarker("sanitize")


class SanitizeHookSpec:
    """Hook specifications for the sanitize plugin system."""

    @hookspec
    def register_transformers(self) -> dict[str, Transformer]:
        """Return a mapping of rule name to transformer.

        Later plugins win on name collisions, including over built-ins.
        """
