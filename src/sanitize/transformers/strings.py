"""Built-in string transformers.

Each transformer acts on ``str`` values only. Any other value kind is
left untouched, so a rule can be tagged on a field where it has nothing
to do without raising. None of these can fail.
"""

from __future__ import annotations

from sanitize.domain.fields import FieldHandle


def trim_space(field: FieldHandle, rule_name: str, rule_arg: str) -> None:
    """Remove leading and trailing whitespace."""
    value = field.get()
    if isinstance(value, str):
        field.set(value.strip())


def lower(field: FieldHandle, rule_name: str, rule_arg: str) -> None:
    value = field.get()
    if isinstance(value, str):
        field.set(value.lower())


def upper(field: FieldHandle, rule_name: str, rule_arg: str) -> None:
    value = field.get()
    if isinstance(value, str):
        field.set(value.upper())


def capitalize(field: FieldHandle, rule_name: str, rule_arg: str) -> None:
    """Lowercase the whole string, then uppercase its first character."""
    value = field.get()
    if isinstance(value, str):
        lowered = value.lower()
        field.set(lowered[:1].upper() + lowered[1:])


def strip_space(field: FieldHandle, rule_name: str, rule_arg: str) -> None:
    """Remove every ASCII space. Tabs and newlines are kept."""
    value = field.get()
    if isinstance(value, str):
        field.set(value.replace(" ", ""))


BUILTIN_TRANSFORMERS = {
    "trim_space": trim_space,
    "strip_space": strip_space,
    "lower": lower,
    "upper": upper,
    "capitalize": capitalize,
}
