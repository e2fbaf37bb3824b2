"""sanitize — declarative, metadata-driven field sanitization for records.

Tag fields with rule strings and call :func:`apply` to mutate a record in
place::

    @dataclass
    class User:
        name: str = rules("trim_space,capitalize")
        tags: list[str] = rules("dive,trim_space,lower", default_factory=list)

    user = User(name="  john  ", tags=[" A "])
    apply(user)  # User(name="John", tags=["a"])
"""

from sanitize.domain.errors import (
    ConfigError,
    InvalidInputError,
    SanitizeError,
    UnsupportedRuleError,
)
from sanitize.domain.fields import FieldHandle, FieldSpec, Rules, describe_fields, rules
from sanitize.domain.rules import Rule, RuleSet, parse_rules
from sanitize.engine import Sanitizer, apply
from sanitize.transformers.registry import (
    DEFAULT_REGISTRY,
    Transformer,
    TransformerRegistry,
    lookup,
    new_registry,
    register,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DEFAULT_REGISTRY",
    "FieldHandle",
    "FieldSpec",
    "InvalidInputError",
    "Rule",
    "RuleSet",
    "Rules",
    "SanitizeError",
    "Sanitizer",
    "Transformer",
    "TransformerRegistry",
    "UnsupportedRuleError",
    "__version__",
    "apply",
    "describe_fields",
    "lookup",
    "new_registry",
    "parse_rules",
    "register",
    "rules",
]
