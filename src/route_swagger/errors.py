"""Exception types raised while building an API document."""


class RouteSwaggerError(Exception):
    """Base class for all generator errors."""


class ConfigError(RouteSwaggerError):
    """Invalid or inconsistent generator configuration."""


class ManifestError(RouteSwaggerError):
    """A route manifest could not be read."""


class DocBlockError(RouteSwaggerError):
    """A structured comment could not be parsed."""


class UnknownPropertyType(RouteSwaggerError):
    """A model property declares a type with no schema mapping."""

    def __init__(self, resource: str, field: str, type_expr: str):
        self.resource = resource
        self.field = field
        self.type_expr = type_expr
        super().__init__(
            f"Unknown type '{type_expr}' for property '{field}' of model '{resource}'"
        )
