"""Typed exceptions raised by the sanitize engine.

Every exception carries a machine-readable ``code`` plus structured
attributes, so callers can catch by type instead of parsing messages.

    SanitizeError (base)
    +-- InvalidInputError     INVALID_INPUT
    +-- UnsupportedRuleError  UNSUPPORTED_RULE
    +-- ConfigError           CONFIG_INVALID

Exceptions raised by transformers are never wrapped: they reach the
caller of ``apply()`` verbatim.
"""

from __future__ import annotations


class SanitizeError(Exception):
    """Base class for all sanitize engine errors."""

    code: str = "SANITIZE_ERROR"


class InvalidInputError(SanitizeError):
    """The top-level argument to ``apply()`` is not a record instance."""

    code: str = "INVALID_INPUT"

    def __init__(self, received: object) -> None:
        self.received_type = type(received).__name__
        super().__init__(f"invalid input: expected a record instance, got {self.received_type}")


class UnsupportedRuleError(SanitizeError):
    """A field references a rule name that is not registered."""

    code: str = "UNSUPPORTED_RULE"

    def __init__(self, rule: str, field: str) -> None:
        self.rule = rule
        self.field = field
        super().__init__(f"unsupported rule: {rule} on field {field}")


class ConfigError(SanitizeError):
    """A configuration file could not be read or does not validate."""

    code: str = "CONFIG_INVALID"

    def __init__(self, path: object, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"invalid configuration in {self.path}: {reason}")
