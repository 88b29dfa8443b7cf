"""Parameter generators.

``PathParameterGenerator`` reads ``{placeholders}`` out of a route uri.
``QueryParameterGenerator`` and ``BodyParameterGenerator`` read a validation
rule mapping; they only differ in where the parameters end up.

Nested rule fields (``items.*.sku``, ``address.city``) are folded into the
schema of their top-level field, so every top-level field yields exactly one
parameter.
"""

import math
import re
from typing import Any, Mapping, Sequence

from route_swagger.parser.base import ParameterSpec
from route_swagger.parser.rules import ARRAY_MARKER, split_field, split_token, tokenize

PLACEHOLDER_RE = re.compile(r"\{(\w+)(\?)?\}")

TYPE_TOKENS = {
    "integer": ("integer", None),
    "int": ("integer", None),
    "numeric": ("number", None),
    "decimal": ("number", None),
    "boolean": ("boolean", None),
    "bool": ("boolean", None),
    "array": ("array", None),
    "list": ("array", None),
    "string": ("string", None),
    "email": ("string", "email"),
    "url": ("string", "uri"),
    "uuid": ("string", "uuid"),
    "date": ("string", "date"),
}

LIMIT_KEYWORDS = {
    "string": ("minLength", "maxLength"),
    "integer": ("minimum", "maximum"),
    "number": ("minimum", "maximum"),
    "array": ("minItems", "maxItems"),
}


class PathParameterGenerator:
    location = "path"

    def __init__(self, uri: str):
        self.uri = uri

    def get_parameters(self) -> list[ParameterSpec]:
        params = []
        seen = set()
        for match in PLACEHOLDER_RE.finditer(self.uri):
            name, optional = match.group(1), match.group(2)
            if name in seen:
                continue
            seen.add(name)
            params.append(
                ParameterSpec(
                    name=name,
                    location=self.location,
                    param_type="string",
                    required=not optional,
                )
            )
        return params


class _Field:
    """Schema under construction for one (possibly nested) rule field."""

    def __init__(self):
        self.type: str | None = None
        self.required = False
        self.format: str | None = None
        self.limits: dict[str, float] = {}
        self.enum: list[str] | None = None
        self.items: "_Field | None" = None
        self.properties: dict[str, "_Field"] = {}

    def apply(self, tokens: list[str]) -> None:
        type_seen = False
        for token in tokens:
            name, args = split_token(token)
            if name == "required":
                self.required = True
            elif name in TYPE_TOKENS and not type_seen:
                type_seen = True
                self.type, self.format = TYPE_TOKENS[name]
            elif name in ("min", "max") and args:
                value = _number(args[0])
                if value is not None:
                    self.limits[name] = value
            elif name == "between" and len(args) == 2:
                low, high = _number(args[0]), _number(args[1])
                if low is not None and high is not None:
                    self.limits.update(min=low, max=high)
            elif name == "in" and args:
                self.enum = args

    def fold(self, segments: list[str], tokens: list[str]) -> None:
        head, rest = segments[0], segments[1:]
        if head == ARRAY_MARKER:
            self.type = "array"
            if self.items is None:
                self.items = _Field()
            child = self.items
        else:
            self.type = "object"
            child = self.properties.setdefault(head, _Field())

        if rest:
            child.fold(rest, tokens)
        else:
            child.apply(tokens)

    @property
    def resolved_type(self) -> str:
        return self.type or "string"

    def keywords(self) -> dict[str, Any]:
        """Schema keywords besides ``type``."""
        kw: dict[str, Any] = {}
        field_type = self.resolved_type
        if self.format and field_type == "string":
            kw["format"] = self.format
        if self.enum:
            kw["enum"] = self.enum
        if field_type in LIMIT_KEYWORDS:
            low_kw, high_kw = LIMIT_KEYWORDS[field_type]
            if "min" in self.limits:
                kw[low_kw] = self.limits["min"]
            if "max" in self.limits:
                kw[high_kw] = self.limits["max"]
        if field_type == "array":
            kw["items"] = self.items.schema() if self.items else {"type": "string"}
        if field_type == "object" and self.properties:
            kw["properties"] = {n: f.schema() for n, f in self.properties.items()}
            required = [n for n, f in self.properties.items() if f.required]
            if required:
                kw["required"] = required
        return kw

    def schema(self) -> dict[str, Any]:
        return {"type": self.resolved_type, **self.keywords()}


class RuleParameterGenerator:
    """Shared walk over a validation rule mapping."""

    location = ""

    def __init__(self, rules: Mapping[str, str | Sequence[Any]]):
        self.rules = rules

    def get_parameters(self) -> list[ParameterSpec]:
        fields: dict[str, _Field] = {}
        for field_name, rule_set in self.rules.items():
            segments = split_field(str(field_name))
            if not segments:
                continue
            tokens = tokenize(rule_set)
            top = fields.setdefault(segments[0], _Field())
            if len(segments) == 1:
                top.apply(tokens)
            else:
                top.fold(segments[1:], tokens)

        return [
            ParameterSpec(
                name=name,
                location=self.location,
                param_type=f.resolved_type,
                required=f.required,
                constraints=f.keywords(),
            )
            for name, f in fields.items()
        ]


class QueryParameterGenerator(RuleParameterGenerator):
    location = "query"


class BodyParameterGenerator(RuleParameterGenerator):
    location = "body"


def serialize_parameters(params: list[ParameterSpec]) -> list[dict]:
    """Render parameters as Swagger 2.0 parameter objects.

    Body parameters collapse into a single ``body`` parameter whose schema
    lists each field as a property.
    """
    result = []
    body = [p for p in params if p.location == "body"]
    for p in params:
        if p.location == "body":
            continue
        result.append({
            "in": p.location,
            "name": p.name,
            "type": p.param_type,
            "required": p.required,
            "description": p.description,
            **p.constraints,
        })

    if body:
        schema: dict[str, Any] = {"type": "object"}
        required = [p.name for p in body if p.required]
        if required:
            schema["required"] = required
        schema["properties"] = {
            p.name: {"type": p.param_type, **p.constraints} for p in body
        }
        result.append({
            "in": "body",
            "name": "body",
            "description": "",
            "schema": schema,
        })
    return result


def _number(value: str) -> float | int | None:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
