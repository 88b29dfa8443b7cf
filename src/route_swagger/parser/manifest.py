"""Route manifest loader.

A manifest is a YAML (or JSON) export of the host application's route table
and model declarations::

    routes:
      - uri: api/users/{id}
        methods: [GET, HEAD]
        handler: app.http.UserController@show
        comment: |
          Show a user.
          @response 404 Not found
        rules:
          fields: string
    models:
      app.models.User: |
        @property string name
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from route_swagger.errors import ManifestError
from route_swagger.generator.models import ModelRegistry
from route_swagger.parser.base import RouteDescriptor, StaticRuleSource


def load_manifest(file_path: Path) -> tuple[list[RouteDescriptor], ModelRegistry]:
    """Load routes and model declarations from a manifest file."""
    text = file_path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid manifest {file_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ManifestError(f"{file_path} must contain a mapping with 'routes' and 'models'")

    routes = [_parse_route(r, i) for i, r in enumerate(data.get("routes") or [])]
    registry = ModelRegistry()
    for name, comment in (data.get("models") or {}).items():
        registry.register(str(name), comment or "")
    return routes, registry


def _parse_route(raw: dict, index: int) -> RouteDescriptor:
    if not isinstance(raw, dict) or "uri" not in raw:
        raise ManifestError(f"Route #{index} needs at least a 'uri'")

    methods = raw.get("methods") or ["GET"]
    if isinstance(methods, str):
        methods = [methods]

    rules = raw.get("rules")
    if rules is not None and not isinstance(rules, dict):
        raise ManifestError(f"Route #{index}: 'rules' must be a mapping of field to rule set")

    try:
        return RouteDescriptor(
            uri=str(raw["uri"]),
            methods=[str(m) for m in methods],
            handler=raw.get("handler"),
            comment=raw.get("comment") or "",
            rule_source=StaticRuleSource(rules) if rules else None,
        )
    except ValidationError as e:
        raise ManifestError(f"Route #{index} is invalid: {e}") from e
