"""Data models shared by the route collaborators and the document generator.

Routes, comments and models from the host application are converted into
these standard models before the generator touches them.
"""

from typing import Any, Mapping, Protocol, Sequence

from pydantic import BaseModel, ConfigDict


class RuleSource(Protocol):
    """Anything that exposes validation rules for a handler's input."""

    def rules(self) -> Mapping[str, str | Sequence[Any]]: ...


class StaticRuleSource:
    """A RuleSource backed by a literal mapping."""

    def __init__(self, rules: Mapping[str, str | Sequence[Any]]):
        self._rules = dict(rules)

    def rules(self) -> Mapping[str, str | Sequence[Any]]:
        return self._rules


class RouteDescriptor(BaseModel):
    """A single route as registered in the host application."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    uri: str  # api/users/{id?}
    methods: list[str]  # GET / HEAD / POST ...
    handler: str | None = None  # None when the handler is a closure
    comment: str = ""
    rule_source: Any = None  # RuleSource


class NormalizedRoute(BaseModel):
    """One (uri, method) unit produced by the route normalizer."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    uri: str  # absolute, optional markers stripped
    original_uri: str  # absolute, optional markers kept
    method: str  # lower case
    handler: str | None = None
    comment: str = ""
    rule_source: Any = None


class DocTag(BaseModel):
    """A single @tag line of a structured comment."""

    name: str
    body: str = ""


class ParsedComment(BaseModel):
    summary: str = ""
    description: str = ""
    tags: list[DocTag] = []

    def has_tag(self, name: str) -> bool:
        return any(t.name == name for t in self.tags)

    def tags_by_name(self, name: str) -> list[DocTag]:
        return [t for t in self.tags if t.name == name]


class ResponseSpec(BaseModel):
    status_code: str
    description: str = ""


class CommentMetadata(BaseModel):
    """What the comment extractor hands to the path assembler."""

    deprecated: bool = False
    summary: str = ""
    description: str = ""
    responses: list[ResponseSpec] = []


class ParameterSpec(BaseModel):
    """A single request parameter inferred for an operation."""

    name: str
    location: str  # path / query / body / header
    param_type: str = "string"  # string / number / integer / boolean / array / object
    required: bool = False
    description: str = ""
    constraints: dict = {}  # maxLength, minimum, enum, format, items, properties, etc.


class ModelSchema(BaseModel):
    title: str
    description: str
    properties: dict[str, dict] | None = None


class ModelDeclaration(BaseModel):
    """A data model the host application declares, with its doc comment."""

    name: str  # fully qualified, e.g. app.models.User
    comment: str = ""
