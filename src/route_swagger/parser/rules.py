"""Validation rule tokenizer.

A rule set is either a pipe separated string (``"required|string|max:255"``)
or a sequence of tokens. Rule objects that are not strings carry no
information we can document and are dropped.
"""

from typing import Any, Sequence

NESTED_SEPARATOR = "."
ARRAY_MARKER = "*"


def tokenize(rule_set: str | Sequence[Any] | None) -> list[str]:
    """Split a rule set into its individual tokens."""
    if not rule_set:
        return []
    if isinstance(rule_set, str):
        raw = rule_set.split("|")
    else:
        raw = [t for t in rule_set if isinstance(t, str)]
    return [t.strip() for t in raw if t.strip()]


def split_token(token: str) -> tuple[str, list[str]]:
    """Split ``max:255`` into ``("max", ["255"])``."""
    name, _, args = token.partition(":")
    return name.strip().lower(), [a.strip() for a in args.split(",")] if args else []


def split_field(field: str) -> list[str]:
    """Split nested field notation ``items.*.sku`` into its segments."""
    return [s for s in field.split(NESTED_SEPARATOR) if s]
