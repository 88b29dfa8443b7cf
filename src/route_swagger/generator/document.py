"""Document builder: top-level entry point of the generator."""

import logging
from typing import Any, Iterable

from route_swagger.config import GeneratorConfig
from route_swagger.generator.models import ModelRegistry, ModelResolver
from route_swagger.generator.normalizer import normalize
from route_swagger.generator.paths import PathAssembler
from route_swagger.parser.base import RouteDescriptor
from route_swagger.parser.docblock import CommentParser

logger = logging.getLogger(__name__)

SWAGGER_VERSION = "2.0"


class DocumentBuilder:
    """Builds a Swagger 2.0 document from a route table.

    Every call to ``generate`` starts from a fresh document, so the builder
    can be reused.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        routes: Iterable[RouteDescriptor],
        models: ModelRegistry | None = None,
        parser: CommentParser | None = None,
    ):
        self.config = config
        self.routes = list(routes)
        self.models = models if models is not None else ModelRegistry()
        self.parser = parser

    def generate(self) -> dict[str, Any]:
        docs = self.base_info()

        resolver = ModelResolver(
            self.models,
            namespace=self.config.model_namespace,
            parser=self.parser,
            strict=self.config.strict_models,
        )
        assembler = PathAssembler(self.config, resolver, self.parser)

        units = normalize(
            self.routes,
            route_filter=self.config.route_filter,
            ignored_handlers=self.config.ignored_controllers,
            ignored_methods=self.config.ignored_methods,
        )
        count = 0
        for route in units:
            assembler.assemble(route, docs)
            count += 1

        logger.debug("Documented %d operations on %d paths", count, len(docs["paths"]))
        return docs

    def base_info(self) -> dict[str, Any]:
        config = self.config
        base_info: dict[str, Any] = {
            "swagger": SWAGGER_VERSION,
            "info": {
                "title": config.title,
                "description": config.description,
                "version": config.app_version,
            },
            "host": config.host,
            "basePath": config.base_path,
        }

        if config.schemes:
            base_info["schemes"] = list(config.schemes)
        if config.consumes:
            base_info["consumes"] = list(config.consumes)
        if config.produces:
            base_info["produces"] = list(config.produces)

        base_info["paths"] = {}
        return base_info


def generate_document(
    config: GeneratorConfig,
    routes: Iterable[RouteDescriptor],
    models: ModelRegistry | None = None,
    parser: CommentParser | None = None,
) -> dict[str, Any]:
    """Shortcut for ``DocumentBuilder(...).generate()``."""
    return DocumentBuilder(config, routes, models, parser).generate()
