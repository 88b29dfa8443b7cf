"""Path assembler: merges comment metadata, parameters and models per operation."""

import logging
import re
from typing import Any, Mapping

from route_swagger.config import GeneratorConfig
from route_swagger.generator.comment import extract
from route_swagger.generator.models import ModelResolver, capitalize, singularize
from route_swagger.generator.parameters import (
    BodyParameterGenerator,
    PathParameterGenerator,
    QueryParameterGenerator,
    RuleParameterGenerator,
    serialize_parameters,
)
from route_swagger.parser.base import CommentMetadata, NormalizedRoute, RuleSource
from route_swagger.parser.docblock import CommentParser

logger = logging.getLogger(__name__)

FIRST_PLACEHOLDER_RE = re.compile(r"\{(\w*)\}")
GENERIC_TAG = "Generic"

BODY_METHODS = ("post", "put", "patch")
MUTATING_METHODS = ("post", "put", "patch", "delete")


class PathAssembler:
    """Builds path items for one generation run.

    Remembers which resources were already resolved so each model is looked
    up at most once per run.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        resolver: ModelResolver,
        parser: CommentParser | None = None,
    ):
        self.config = config
        self.resolver = resolver
        self.parser = parser
        self._resolved: set[str] = set()

    def assemble(self, route: NormalizedRoute, document: dict) -> dict:
        """Build the path item for ``route`` and write it into ``document``."""
        comment = route.comment if route.handler is not None else ""
        metadata = extract(comment, self.config.parse_doc_block, self.parser)
        resource = self.resource_name(route.uri)

        item: dict[str, Any] = {
            "summary": metadata.summary,
            "description": metadata.description,
            "deprecated": metadata.deprecated,
            "responses": self.responses(metadata, route.method),
            "tags": [resource],
        }

        parameters = self.parameters(route)
        if parameters:
            item["parameters"] = parameters

        document["paths"].setdefault(route.uri, {})[route.method] = item
        self.add_model(resource, document)
        return item

    def responses(self, metadata: CommentMetadata, method: str) -> dict[str, dict]:
        """Merge tag responses, then base responses, then modified responses.

        The first writer of a status code wins.
        """
        responses: dict[str, dict] = {}
        for response in metadata.responses:
            responses.setdefault(response.status_code, {"description": response.description})

        extra = [self.config.base_responses]
        if method in MUTATING_METHODS:
            extra.append(self.config.mod_responses)
        for defaults in extra:
            for code, description in defaults.items():
                responses.setdefault(code, {"description": description})
        return responses

    def parameters(self, route: NormalizedRoute) -> list[dict]:
        params = PathParameterGenerator(route.original_uri).get_parameters()

        rules = self.rules(route)
        if rules:
            params += self.parameter_generator(route.method, rules).get_parameters()

        return serialize_parameters(params)

    def parameter_generator(self, method: str, rules: Mapping) -> RuleParameterGenerator:
        if method in BODY_METHODS:
            return BodyParameterGenerator(rules)
        return QueryParameterGenerator(rules)

    def rules(self, route: NormalizedRoute) -> Mapping | None:
        """Validation rules of the handler's validated input, if it has one."""
        source: RuleSource | None = route.rule_source
        if route.handler is None or source is None:
            return None
        rules = getattr(source, "rules", None)
        if not callable(rules):
            return None
        try:
            return rules()
        except Exception as e:
            logger.warning("Skipping rules of %s: %s", route.handler, e)
            return None

    def resource_name(self, uri: str) -> str:
        match = FIRST_PLACEHOLDER_RE.search(uri)
        if match and match.group(1):
            return capitalize(singularize(match.group(1)))
        return capitalize(self.route_model_name(uri))

    def route_model_name(self, uri: str) -> str:
        if not self.config.guess_tag:
            return GENERIC_TAG

        if self.config.route_filter:
            uri = uri.replace(self.config.route_filter, "", 1)
        segments = uri.split("/")
        if len(segments) < 2 or not segments[1]:
            return GENERIC_TAG
        return singularize(segments[1])

    def add_model(self, resource: str, document: dict) -> None:
        if resource in self._resolved:
            logger.debug("Model %s already resolved", resource)
            return
        self._resolved.add(resource)

        schema = self.resolver.resolve(resource)
        if schema is None:
            logger.debug("No model declared for %s", resource)
            return
        document.setdefault("definitions", {})[resource] = schema.model_dump(exclude_none=True)
