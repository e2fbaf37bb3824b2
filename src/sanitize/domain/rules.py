"""Rule string parsing.

A rule string is a comma-separated list of tokens, each either ``name``
or ``name=argument``::

    "trim_space,capitalize"
    "dive,trim_space"
    "truncate=32,upper"

``dive`` parses like any other rule name but is a traversal directive:
the engine uses it to decide whether to descend into sequences and
optional records, and never dispatches it to the transformer registry.

The empty string and the literal ``-`` mean "no rules". Callers check
:func:`is_skipped` before parsing.
"""

from __future__ import annotations

from dataclasses import dataclass

DIVE = "dive"
SKIP_MARKER = "-"

_RULE_SEPARATOR = ","
_ARG_SEPARATOR = "="
_DIVE_PREFIX = DIVE + _RULE_SEPARATOR


@dataclass(frozen=True)
class Rule:
    """One parsed ``name[=argument]`` token."""

    name: str
    arg: str = ""

    @property
    def is_dive(self) -> bool:
        return self.name == DIVE


@dataclass(frozen=True)
class RuleSet:
    """Ordered rules for a single field. Order is execution order."""

    rules: tuple[Rule, ...] = ()

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def dive(self) -> bool:
        """Whether a ``dive`` directive appears anywhere in the set."""
        return any(rule.is_dive for rule in self.rules)

    def without_dive(self) -> RuleSet:
        """Drop a leading ``dive`` directive, keeping everything after it."""
        if self.rules and self.rules[0].is_dive:
            return RuleSet(self.rules[1:])
        return self


def is_skipped(raw: str | None) -> bool:
    """True when *raw* carries no rules (missing, blank, or ``-``)."""
    if raw is None:
        return True
    stripped = raw.strip()
    return stripped == "" or stripped == SKIP_MARKER


def parse_rule(token: str) -> Rule:
    """Parse a single ``name[=argument]`` token.

    Only the first ``=`` separates name from argument, so arguments may
    themselves contain ``=``.

    Examples:
        >>> parse_rule("upper")
        Rule(name='upper', arg='')
        >>> parse_rule("pad=x=y")
        Rule(name='pad', arg='x=y')
    """
    name, _, arg = token.partition(_ARG_SEPARATOR)
    return Rule(name=name.strip(), arg=arg)


def parse_rules(raw: str) -> RuleSet:
    """Parse a full rule string into an ordered :class:`RuleSet`."""
    stripped = raw.strip()
    if not stripped:
        return RuleSet()
    return RuleSet(tuple(parse_rule(token) for token in stripped.split(_RULE_SEPARATOR)))


def has_dive(raw: str) -> bool:
    """True when any token of *raw* is exactly ``dive``."""
    return any(token.strip() == DIVE for token in raw.split(_RULE_SEPARATOR))


def strip_dive(raw: str) -> str:
    """Remove a leading ``dive,`` so the remainder can be applied to a leaf.

    Examples:
        >>> strip_dive("dive,trim_space,upper")
        'trim_space,upper'
        >>> strip_dive("trim_space,dive")
        'trim_space,dive'
    """
    stripped = raw.strip()
    if stripped == DIVE:
        return ""
    if stripped.startswith(_DIVE_PREFIX):
        return stripped[len(_DIVE_PREFIX) :].strip()
    return stripped
