"""RuleService — inspect the rule vocabulary and sanitize JSON payloads.

Backs the ``rules``, ``parse`` and ``apply`` CLI commands. Records for
``apply`` are loaded from a ``module:Class`` target (a dataclass or a
pydantic model) and validated from JSON with pydantic's ``TypeAdapter``.
"""

from __future__ import annotations

import importlib
import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from sanitize.domain.errors import SanitizeError
from sanitize.domain.fields import is_record
from sanitize.domain.rules import is_skipped, parse_rules
from sanitize.services.result import ServiceResult

if TYPE_CHECKING:
    from sanitize.engine import Sanitizer

logger = logging.getLogger(__name__)


def load_target(target: str) -> type:
    """Resolve a ``package.module:ClassName`` reference.

    Raises:
        ValueError: If *target* is malformed or does not name a class.
        ImportError: If the module cannot be imported.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"Target must look like 'module:Class', got {target!r}"
        raise ValueError(msg)

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            msg = f"{module_name!r} has no attribute {attr_path!r}"
            raise ValueError(msg) from exc

    if not isinstance(obj, type):
        msg = f"{target!r} is not a class"
        raise ValueError(msg)
    return obj


class RuleService:
    """Operations over one :class:`~sanitize.engine.Sanitizer`."""

    def __init__(self, sanitizer: Sanitizer) -> None:
        self._sanitizer = sanitizer

    def list_rules(self) -> ServiceResult:
        names = self._sanitizer.registry.names()
        return ServiceResult.success("rules", {"rules": names, "count": len(names)})

    def parse(self, raw: str) -> ServiceResult:
        """Show how *raw* is interpreted: skipped, dive flag, ordered rules."""
        if is_skipped(raw):
            return ServiceResult.success("parse", {"skipped": True, "dive": False, "rules": []})

        rule_set = parse_rules(raw)
        unknown = [
            rule.name
            for rule in rule_set
            if not rule.is_dive and rule.name not in self._sanitizer.registry
        ]
        return ServiceResult.success(
            "parse",
            {
                "skipped": False,
                "dive": rule_set.dive,
                "rules": [{"name": rule.name, "arg": rule.arg} for rule in rule_set],
            },
            warnings=[f"Rule '{name}' is not registered" for name in unknown],
        )

    def apply_json(self, target: str, payload: str) -> ServiceResult:
        """Validate *payload* into *target*, sanitize it, and return it as JSON data."""
        op = "apply"
        try:
            record_type = load_target(target)
        except (ImportError, ValueError) as exc:
            return ServiceResult.failure(op, "INVALID_TARGET", str(exc), target=target)

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            return ServiceResult.failure(op, "INVALID_JSON", f"Invalid JSON input: {exc}")

        try:
            adapter: TypeAdapter[Any] = TypeAdapter(record_type)
        except PydanticSchemaGenerationError as exc:
            return ServiceResult.failure(op, "INVALID_TARGET", str(exc), target=target)

        try:
            record = adapter.validate_python(data)
        except ValidationError as exc:
            return ServiceResult.failure(
                op,
                "VALIDATION_ERROR",
                f"Input does not match {record_type.__name__}",
                errors=exc.errors(include_url=False, include_context=False),
            )

        if not is_record(record):
            return ServiceResult.failure(
                op, "INVALID_TARGET", f"{target!r} is not a record type", target=target
            )

        try:
            self._sanitizer.apply(record)
        except SanitizeError as exc:
            return ServiceResult.from_error(op, exc)
        except Exception as exc:
            logger.debug("Transformer failed while sanitizing %s", target, exc_info=True)
            return ServiceResult.failure(
                op, "TRANSFORMER_FAILED", str(exc), exception=type(exc).__name__
            )

        return ServiceResult.success(
            op, {"target": target, "record": adapter.dump_python(record, mode="json")}
        )

