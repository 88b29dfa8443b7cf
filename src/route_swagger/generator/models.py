"""Model resolver: turns a resource name into a definitions schema.

Models are looked up in a ``ModelRegistry`` by ``namespace + resource``.
Their structured comment declares fields with ``@property`` tags::

    @property string name
    @property int|null age
"""

import logging
import re

from route_swagger.errors import DocBlockError, UnknownPropertyType
from route_swagger.parser.base import DocTag, ModelDeclaration, ModelSchema
from route_swagger.parser.docblock import CommentParser, DocBlockParser, own_doc, safe_parse

logger = logging.getLogger(__name__)

PROPERTY_TAGS = ("property", "property-read", "property-write")

TYPES = {
    "array": "array",
    "list": "array",
    "boolean": "boolean",
    "bool": "boolean",
    "callable": "object",
    "collection": "array",
    "float": "number",
    "double": "number",
    "integer": "number",
    "int": "number",
    "mixed": "object",
    "null": "object",
    "none": "object",
    "string": "string",
    "str": "string",
    "object": "object",
    "dict": "object",
}

GENERIC_RE = re.compile(r"^([\w.\\]+)\s*[<\[].*[>\]]$")
CLASS_NAME_RE = re.compile(r"^\\?(?:[A-Za-z_]\w*[.\\])*[A-Z]\w*$")

IRREGULAR_PLURALS = {
    "people": "person",
    "children": "child",
    "men": "man",
    "women": "woman",
    "mice": "mouse",
    "geese": "goose",
    "feet": "foot",
    "teeth": "tooth",
    "data": "datum",
}
UNCOUNTABLE = {"news", "series", "species", "info", "information", "equipment", "media"}


class ModelRegistry:
    """Model declarations known to the host application."""

    def __init__(self, declarations: list[ModelDeclaration] | None = None):
        self._models: dict[str, ModelDeclaration] = {}
        for declaration in declarations or []:
            self._models[declaration.name] = declaration

    def register(self, name: str, comment: str = "") -> ModelDeclaration:
        declaration = ModelDeclaration(name=name, comment=comment or "")
        self._models[name] = declaration
        return declaration

    def register_class(self, cls: type, namespace: str | None = None) -> ModelDeclaration:
        """Register a Python class under ``namespace + cls.__name__``.

        Without a namespace the class' module is used.
        """
        prefix = namespace if namespace is not None else f"{cls.__module__}."
        return self.register(f"{prefix}{cls.__name__}", own_doc(cls))

    def lookup(self, name: str) -> ModelDeclaration | None:
        return self._models.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)


class ModelResolver:
    """Resolves resource names to ``ModelSchema`` definitions."""

    def __init__(
        self,
        registry: ModelRegistry,
        namespace: str = "",
        parser: CommentParser | None = None,
        strict: bool = True,
    ):
        self.registry = registry
        self.namespace = namespace
        self.parser = parser or DocBlockParser()
        self.strict = strict

    def resolve(self, resource: str) -> ModelSchema | None:
        qualified = f"{self.namespace}{resource}"
        declaration = self.registry.lookup(qualified)
        if declaration is None:
            return None

        if not declaration.comment.strip():
            return ModelSchema(title=resource, description=f"{resource} model")

        parsed = safe_parse(self.parser, declaration.comment)
        if isinstance(parsed, DocBlockError):
            error = DocBlockError(f"Model {resource} ({qualified}): {parsed}")
            if self.strict:
                raise error from parsed
            logger.warning("Ignoring fields: %s", error)
            return ModelSchema(title=resource, description=f"{resource} model")

        tags = [t for t in parsed.tags if t.name in PROPERTY_TAGS]
        return ModelSchema(
            title=resource,
            description=f"{resource} model",
            properties=self._fields(resource, tags),
        )

    def _fields(self, resource: str, tags: list[DocTag]) -> dict[str, dict]:
        fields = {}
        for tag in tags:
            type_expr, name = split_property_tag(tag.body)
            if not name:
                logger.warning("Model %s: @%s tag without a variable name", resource, tag.name)
                continue
            try:
                fields[name] = {"type": determine_type(type_expr, resource, name)}
            except UnknownPropertyType as e:
                if self.strict:
                    raise
                logger.warning("Skipping field: %s", e)
        return fields


def split_property_tag(body: str) -> tuple[str, str]:
    """Split ``string $name Description`` into ``("string", "name")``.

    The type may be omitted (``$name``), in which case it is ``mixed``.
    """
    parts = body.split()
    if not parts:
        return "mixed", ""
    if parts[0].startswith("$"):
        return "mixed", parts[0][1:]
    if len(parts) == 1:
        return "mixed", parts[0]
    return parts[0], parts[1].lstrip("$")


def determine_type(type_expr: str, resource: str = "", field: str = "") -> str:
    """Map a type expression to a schema type.

    Unions resolve to their first member. Class names map to ``object`` and
    generic collections (``Collection<User>``, ``list[int]``) to ``array``.
    """
    first = type_expr.split("|")[0].strip()
    if first.startswith("?"):
        first = first[1:]

    if first.endswith("[]"):
        return "array"

    generic = GENERIC_RE.match(first)
    if generic:
        base = generic.group(1)
        mapped = TYPES.get(base.lower())
        if mapped:
            return mapped
        if CLASS_NAME_RE.match(base):
            return TYPES["collection"]
        raise UnknownPropertyType(resource, field, type_expr)

    mapped = TYPES.get(first.lower())
    if mapped:
        return mapped
    if CLASS_NAME_RE.match(first):
        return TYPES["object"]
    raise UnknownPropertyType(resource, field, type_expr)


def singularize(word: str) -> str:
    lower = word.lower()
    if not lower or lower in UNCOUNTABLE:
        return word
    if lower in IRREGULAR_PLURALS:
        return _match_case(word, IRREGULAR_PLURALS[lower])
    if lower.endswith("ies") and len(lower) > 3:
        return word[:-3] + "y"
    if lower.endswith("ves"):
        return word[:-3] + "f"
    if lower.endswith(("sses", "shes", "ches", "xes", "zzes", "uses")):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


def capitalize(word: str) -> str:
    """Upper-case the first letter only (``postId`` -> ``PostId``)."""
    return word[:1].upper() + word[1:]


def _match_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return capitalize(replacement)
    return replacement
