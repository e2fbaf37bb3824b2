"""Traversal engine — walks a record and applies each field's rules in place.

Per field, in declaration order:

- not settable (private name, frozen record/field) -> skipped
- rule string empty or ``-``                        -> skipped
- value is None or a record                         -> dive procedure
- value is a list or tuple                          -> each element dived, only with ``dive``
- anything else                                     -> transformer chain

A record held directly in a field is always descended into, whatever its
rules say. A record held in an ``X | None`` field is only descended into
when ``dive`` is present. Lists and tuples need ``dive`` too.

The first error aborts the whole call. Fields already mutated stay
mutated; there is no rollback.
"""

from __future__ import annotations

import logging
from collections.abc import MutableSequence, Sequence
from typing import TYPE_CHECKING, Any

from sanitize.domain.errors import InvalidInputError, UnsupportedRuleError
from sanitize.domain.fields import (
    RULES_KEY,
    AttributeHandle,
    ElementHandle,
    FieldHandle,
    describe_fields,
    is_record,
    is_sequence,
)
from sanitize.domain.rules import RuleSet, has_dive, is_skipped, parse_rules, strip_dive
from sanitize.transformers.registry import DEFAULT_REGISTRY, TransformerRegistry

if TYPE_CHECKING:
    from sanitize.config.settings import SanitizeSettings

logger = logging.getLogger(__name__)


class Sanitizer:
    """Applies tagged rules to records using one transformer registry.

    Parameters:
        registry: Rule vocabulary. Defaults to the process-wide registry.
        metadata_key: Field metadata key holding the rule string.
    """

    def __init__(
        self,
        registry: TransformerRegistry | None = None,
        *,
        metadata_key: str = RULES_KEY,
    ) -> None:
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.metadata_key = metadata_key

    @classmethod
    def from_settings(cls, settings: SanitizeSettings) -> Sanitizer:
        """Build an engine with its own registry: built-ins plus enabled plugins."""
        from sanitize.transformers.registry import new_registry

        registry = new_registry()
        if settings.plugins.enabled:
            from sanitize.plugins.manager import PluginManager

            pm = PluginManager()
            pm.discover_and_load(local_dir=settings.plugin_dir)
            pm.load_transformers(registry)
        return cls(registry, metadata_key=settings.engine.metadata_key)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply(self, record: Any) -> None:
        """Sanitize *record* in place.

        Raises:
            InvalidInputError: If *record* is None or not a record instance.
            UnsupportedRuleError: If a field names an unregistered rule.
        """
        if not is_record(record):
            raise InvalidInputError(record)
        self._apply_record(record)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _apply_record(self, record: Any) -> None:
        for spec in describe_fields(type(record), metadata_key=self.metadata_key):
            if not spec.settable:
                logger.debug(
                    "Skipping non-settable field %s",
                    spec.name,
                    extra={"record": type(record).__name__, "field": spec.name},
                )
                continue

            raw = spec.rules.strip()
            if is_skipped(raw):
                continue

            handle = AttributeHandle(record, spec.name)
            value = handle.get()

            if value is None or is_record(value):
                self._dive(handle, raw, optional=spec.optional)
            elif is_sequence(value):
                if has_dive(raw):
                    self._dive_elements(handle, value, raw)
            else:
                self._run_chain(handle, parse_rules(raw))

    def _dive_elements(self, handle: FieldHandle, value: Sequence[Any], raw: str) -> None:
        """Dive into every element. Lists are updated in place.

        Tuples are walked through a scratch list; the field is reassigned
        only when an element was replaced, so a tuple of records keeps its
        identity.
        """
        items = value if isinstance(value, MutableSequence) else list(value)
        for index in range(len(items)):
            self._dive(ElementHandle(items, index, handle.name), raw, optional=False)
        if items is not value and any(new is not old for new, old in zip(items, value)):
            handle.set(_rebuild_tuple(value, items))

    def _dive(self, handle: FieldHandle, raw: str, *, optional: bool) -> None:
        value = handle.get()
        if value is None:
            return

        if optional:
            if is_record(value) and has_dive(raw):
                logger.debug(
                    "Diving into optional field %s", handle.name, extra={"field": handle.name}
                )
                self._apply_record(value)
            else:
                self._run_chain(handle, parse_rules(raw))
            return

        if is_record(value):
            logger.debug("Diving into field %s", handle.name, extra={"field": handle.name})
            self._apply_record(value)
            return

        self._run_chain(handle, parse_rules(strip_dive(raw)))

    def _run_chain(self, handle: FieldHandle, rule_set: RuleSet) -> None:
        for rule in rule_set:
            if rule.is_dive:
                continue
            transformer = self.registry.lookup(rule.name)
            if transformer is None:
                raise UnsupportedRuleError(rule.name, handle.name)
            logger.debug(
                "Applying rule %s to field %s",
                rule.name,
                handle.name,
                extra={"rule": rule.name, "field": handle.name},
            )
            transformer(handle, rule.name, rule.arg)


def _rebuild_tuple(original: Any, items: list[Any]) -> tuple[Any, ...]:
    if hasattr(original, "_make"):
        return original._make(items)
    return type(original)(items)


_default = Sanitizer()


def apply(record: Any) -> None:
    """Sanitize *record* in place using the process-wide registry."""
    _default.apply(record)
