"""Field descriptors — which fields a record has and which rules they carry.

The traversal engine never inspects record classes itself. It asks
:func:`describe_fields` for an ordered list of :class:`FieldSpec` and
reads/writes values through a :class:`FieldHandle`.

Rules can be attached in three ways, checked in this order:

1. An explicit ``__sanitize__`` class mapping of field name -> rule string.
   This is the only option for plain classes and overrides the others.
2. ``Annotated[str, Rules("trim_space")]`` on a dataclass or pydantic field.
3. Field metadata under the metadata key (default ``"sanitize"``):
   ``dataclasses.field(metadata={"sanitize": ...})`` or
   ``pydantic.Field(json_schema_extra={"sanitize": ...})``.

Example::

    @dataclass
    class Address:
        city: str = rules("trim_space,capitalize")
        postcode: Annotated[str, Rules("trim_space,upper,strip_space")] = ""
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
import typing
from collections.abc import Mapping, MutableSequence
from dataclasses import dataclass
from typing import Annotated, Any, Protocol, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)

RULES_KEY = "sanitize"
EXPLICIT_RULES_ATTR = "__sanitize__"


@dataclass(frozen=True)
class Rules:
    """``Annotated`` marker carrying a field's rule string."""

    spec: str


@dataclass(frozen=True)
class FieldSpec:
    """One field of a record type, in declaration order."""

    name: str
    rules: str
    optional: bool = False
    settable: bool = True


def rules(spec: str, **kwargs: Any) -> Any:
    """Shorthand for ``dataclasses.field(metadata={"sanitize": spec}, ...)``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[RULES_KEY] = spec
    return dataclasses.field(metadata=metadata, **kwargs)


# ---------------------------------------------------------------------------
# Field handles
# ---------------------------------------------------------------------------


class FieldHandle(Protocol):
    """Read/write access to exactly one value slot."""

    @property
    def name(self) -> str: ...

    def get(self) -> Any: ...

    def set(self, value: Any) -> None: ...


@dataclass(frozen=True)
class AttributeHandle:
    """Handle on a record attribute."""

    record: Any
    name: str

    def get(self) -> Any:
        return getattr(self.record, self.name)

    def set(self, value: Any) -> None:
        setattr(self.record, self.name, value)


@dataclass(frozen=True)
class ElementHandle:
    """Handle on one element of a list field.

    ``name`` is the owning field's name so errors point at the tag.
    """

    items: MutableSequence[Any]
    index: int
    name: str

    def get(self) -> Any:
        return self.items[self.index]

    def set(self, value: Any) -> None:
        self.items[self.index] = value


# ---------------------------------------------------------------------------
# Record detection
# ---------------------------------------------------------------------------


def is_record(value: object) -> bool:
    """True for record *instances*: dataclasses, pydantic models, explicit maps."""
    if value is None or isinstance(value, type):
        return False
    if isinstance(value, BaseModel) or dataclasses.is_dataclass(value):
        return True
    return isinstance(getattr(type(value), EXPLICIT_RULES_ATTR, None), Mapping)


def is_sequence(value: object) -> bool:
    """True for lists and tuples of elements, never for strings or bytes."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (MutableSequence, tuple))


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


def describe_fields(record_type: type, *, metadata_key: str = RULES_KEY) -> list[FieldSpec]:
    """Return the :class:`FieldSpec` list for *record_type*.

    Raises:
        TypeError: If *record_type* is not a supported record class.
    """
    declared = getattr(record_type, EXPLICIT_RULES_ATTR, None)
    has_explicit = isinstance(declared, Mapping)
    explicit: Mapping[str, str] = declared if has_explicit else {}

    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return _describe_model(record_type, explicit, metadata_key)
    if dataclasses.is_dataclass(record_type):
        return _describe_dataclass(record_type, explicit, metadata_key)
    if has_explicit:
        return _describe_explicit(record_type, explicit)

    msg = f"{record_type!r} is not a dataclass, pydantic model, or {EXPLICIT_RULES_ATTR} class"
    raise TypeError(msg)


def _describe_dataclass(
    cls: type, explicit: Mapping[str, str], metadata_key: str
) -> list[FieldSpec]:
    hints = _type_hints(cls)
    frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    specs: list[FieldSpec] = []
    for f in dataclasses.fields(cls):
        annotation = hints.get(f.name, f.type)
        raw = _rule_string(cls, f.name, explicit.get(f.name))
        if raw is None:
            raw = _annotated_rules(annotation)
        if raw is None:
            raw = _rule_string(cls, f.name, f.metadata.get(metadata_key))
        specs.append(
            FieldSpec(
                name=f.name,
                rules=raw or "",
                optional=_is_optional(annotation),
                settable=not frozen and _is_public(f.name),
            )
        )
    return specs


def _describe_model(
    cls: type[BaseModel], explicit: Mapping[str, str], metadata_key: str
) -> list[FieldSpec]:
    frozen_model = bool(cls.model_config.get("frozen", False))
    specs: list[FieldSpec] = []
    for name, info in cls.model_fields.items():
        raw = _rule_string(cls, name, explicit.get(name))
        if raw is None:
            raw = _rules_marker(info.metadata)
        if raw is None and isinstance(info.json_schema_extra, dict):
            raw = _rule_string(cls, name, info.json_schema_extra.get(metadata_key))
        specs.append(
            FieldSpec(
                name=name,
                rules=raw or "",
                optional=_is_optional(info.annotation),
                settable=not (frozen_model or info.frozen) and _is_public(name),
            )
        )
    return specs


def _describe_explicit(cls: type, explicit: Mapping[str, str]) -> list[FieldSpec]:
    hints = _type_hints(cls)
    return [
        FieldSpec(
            name=name,
            rules=_rule_string(cls, name, raw) or "",
            optional=_is_optional(hints.get(name)),
            settable=_is_public(name),
        )
        for name, raw in explicit.items()
    ]


# ---------------------------------------------------------------------------
# Annotation helpers
# ---------------------------------------------------------------------------


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _rule_string(cls: type, name: str, value: object) -> str | None:
    if value is None or isinstance(value, str):
        return value
    logger.warning(
        "Ignoring non-string rules %r on field %s.%s", value, cls.__qualname__, name
    )
    return None


def _type_hints(cls: type) -> dict[str, Any]:
    """Resolved hints with ``Annotated`` extras.

    When the class as a whole cannot be resolved, each annotation is
    resolved on its own; only the ones that still fail stay as strings.
    """
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        pass

    hints: dict[str, Any] = {}
    for owner in reversed(cls.__mro__):
        for name, annotation in inspect.get_annotations(owner).items():
            hints[name] = _resolve_one(owner, name, annotation)
    return hints


def _resolve_one(owner: type, name: str, annotation: Any) -> Any:
    holder = type(
        owner.__name__,
        (),
        {"__annotations__": {name: annotation}, "__module__": owner.__module__},
    )
    try:
        return typing.get_type_hints(holder, localns=dict(vars(owner)), include_extras=True)[name]
    except (NameError, TypeError):
        if isinstance(annotation, str) and f"{Rules.__name__}(" in annotation:
            logger.warning(
                "Cannot resolve annotation %r of %s.%s; its rules are ignored",
                annotation,
                owner.__qualname__,
                name,
            )
        return annotation


def _rules_marker(metadata: Any) -> str | None:
    for item in metadata:
        if isinstance(item, Rules):
            return item.spec
    return None


def _annotated_rules(annotation: Any) -> str | None:
    if typing.get_origin(annotation) is Annotated:
        return _rules_marker(annotation.__metadata__)
    return None


def _is_optional(annotation: Any) -> bool:
    """True for ``X | None`` and ``Optional[X]``, including under ``Annotated``."""
    if annotation is None:
        return False
    if isinstance(annotation, str):
        return _is_optional_source(annotation.replace(" ", ""))
    if typing.get_origin(annotation) is Annotated:
        return _is_optional(typing.get_args(annotation)[0])
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in typing.get_args(annotation)
    return False


def _is_optional_source(source: str) -> bool:
    """Same check on an unresolved annotation; only the outermost union counts."""
    source = source.removeprefix("typing.")
    for wrapper in ("Annotated[", "Optional[", "Union["):
        if source.startswith(wrapper) and source.endswith("]"):
            args = _split_top_level(source[len(wrapper) : -1], ",")
            if wrapper == "Annotated[":
                return _is_optional_source(args[0])
            if wrapper == "Optional[":
                return True
            return any(arg.removeprefix("typing.") == "None" for arg in args)
    return "None" in _split_top_level(source, "|")


def _split_top_level(source: str, separator: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(source):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(source[start:index])
            start = index + 1
    parts.append(source[start:])
    return parts
