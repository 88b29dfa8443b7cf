"""Route normalizer: raw route table -> (uri, method, handler) units."""

import logging
import re
from typing import Iterable, Iterator

from route_swagger.parser.base import NormalizedRoute, RouteDescriptor

logger = logging.getLogger(__name__)

OPTIONAL_MARKER_RE = re.compile(r"\{(\w+)\?\}")


def absolute_uri(uri: str) -> str:
    return uri if uri.startswith("/") else "/" + uri


def strip_optional_char(uri: str) -> str:
    """Turn ``/users/{id?}`` into ``/users/{id}``."""
    return OPTIONAL_MARKER_RE.sub(r"{\1}", uri)


def normalize(
    routes: Iterable[RouteDescriptor],
    route_filter: str | None = None,
    ignored_handlers: Iterable[str] = (),
    ignored_methods: Iterable[str] = ("head",),
) -> Iterator[NormalizedRoute]:
    """Expand each route into one unit per documented HTTP method.

    Order of the input is preserved. Routes outside ``route_filter`` and
    routes whose handler is ignored are dropped.
    """
    ignored_handlers = set(ignored_handlers)
    ignored_methods = {m.lower() for m in ignored_methods}

    for route in routes:
        original_uri = absolute_uri(route.uri)
        uri = strip_optional_char(original_uri)

        if route_filter and not uri.startswith(route_filter):
            logger.debug("Skipping %s: outside filter %s", uri, route_filter)
            continue

        if route.handler is not None and route.handler in ignored_handlers:
            logger.debug("Skipping %s: handler %s is ignored", uri, route.handler)
            continue

        for method in route.methods:
            method = method.lower()
            if method in ignored_methods:
                continue
            yield NormalizedRoute(
                uri=uri,
                original_uri=original_uri,
                method=method,
                handler=route.handler,
                comment=route.comment,
                rule_source=route.rule_source,
            )
