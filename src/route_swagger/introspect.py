"""Build route descriptors from live Python handlers.

These helpers sit on the host side: they turn controller methods into
``RouteDescriptor`` objects so the generator itself never has to inspect or
instantiate anything.
"""

import inspect
import logging
import typing
from typing import Any, Callable, Iterable

from route_swagger.parser.base import RouteDescriptor
from route_swagger.parser.docblock import own_doc

logger = logging.getLogger(__name__)


class ValidatedRequest:
    """Base class for request types that declare validation rules.

    Subclasses override ``rules`` and are used as handler annotations::

        class StoreUserRequest(ValidatedRequest):
            def rules(self):
                return {"name": "required|string|max:255"}

        class UserController:
            def store(self, request: StoreUserRequest): ...
    """

    def rules(self) -> dict[str, Any]:
        return {}


def handler_reference(handler: Callable) -> str | None:
    """``module.Class@method`` for named class methods, None otherwise."""
    qualname = getattr(handler, "__qualname__", None)
    if not qualname or "<" in qualname or "." not in qualname:
        return None
    owner, _, method = qualname.rpartition(".")
    return f"{handler.__module__}.{owner}@{method}"


def request_type_of(handler: Callable) -> type[ValidatedRequest] | None:
    """The first ``ValidatedRequest`` subclass among the handler's parameters."""
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        return None

    try:
        hints = typing.get_type_hints(handler)
    except (NameError, TypeError):
        hints = {}

    for name, param in signature.parameters.items():
        annotation = hints.get(name, param.annotation)
        if isinstance(annotation, type) and issubclass(annotation, ValidatedRequest):
            return annotation
    return None


def rule_source_of(handler: Callable) -> ValidatedRequest | None:
    """An instance of the handler's validated request type, if it declares one.

    A request type that cannot be constructed without arguments is skipped.
    """
    request_type = request_type_of(handler)
    if request_type is None:
        return None
    try:
        return request_type()
    except Exception as e:
        logger.warning("Cannot instantiate %s: %s", request_type.__qualname__, e)
        return None


def route_from_handler(uri: str, methods: Iterable[str], handler: Callable) -> RouteDescriptor:
    reference = handler_reference(handler)
    if reference is None:
        return RouteDescriptor(uri=uri, methods=list(methods))

    return RouteDescriptor(
        uri=uri,
        methods=list(methods),
        handler=reference,
        comment=own_doc(handler),
        rule_source=rule_source_of(handler),
    )
