"""Generator configuration.

Settings are read from a YAML file. Keys may be written in camelCase
(``appVersion``, ``parseDocBlock``) or snake_case (``app_version``).
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from route_swagger.errors import ConfigError

DEFAULT_PRESET = "default"


class Preset(BaseModel):
    ignored_controllers: list[str] = []


class GeneratorConfig(BaseModel):
    """Static settings for one generation run."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Basic info
    title: str = Field(default_factory=lambda: os.getenv("APP_NAME", ""))
    description: str = ""
    app_version: str = Field("1.0.0", alias="appVersion")
    host: str = Field(default_factory=lambda: os.getenv("APP_URL", ""))
    base_path: str = Field("/", alias="basePath")
    schemes: list[str] = []
    consumes: list[str] = []
    produces: list[str] = []

    # Methods in this list never appear in the paths map
    ignored_methods: list[str] = Field(["head"], alias="ignoredMethods")

    # Parse handler comments for summary, description, @deprecated, @response
    parse_doc_block: bool = Field(True, alias="parseDocBlock")

    # Attached to every path / to every POST, PUT, PATCH, DELETE path
    base_responses: dict[str, str] = Field({"200": "OK"}, alias="baseResponses")
    mod_responses: dict[str, str] = Field({"201": "OK"}, alias="modResponses")

    # Use the first path segment as tag when the uri has no placeholder
    guess_tag: bool = False
    model_namespace: str = "app.models."
    # Abort on unknown model property types instead of skipping the field
    strict_models: bool = True

    presets: dict[str, Preset] = {DEFAULT_PRESET: Preset()}
    preset: str = DEFAULT_PRESET
    route_filter: str | None = Field(None, alias="routeFilter")

    @field_validator("ignored_methods")
    @classmethod
    def _lower_methods(cls, value: list[str]) -> list[str]:
        return [m.lower() for m in value]

    @field_validator("base_responses", "mod_responses", mode="before")
    @classmethod
    def _normalize_responses(cls, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("responses must be a mapping of status code to description")
        result = {}
        for code, desc in value.items():
            if isinstance(desc, dict):
                desc = desc.get("description", "")
            result[str(code)] = "" if desc is None else str(desc)
        return result

    @property
    def ignored_controllers(self) -> list[str]:
        """Handlers ignored by the active preset."""
        try:
            return self.presets[self.preset].ignored_controllers
        except KeyError:
            raise ConfigError(f"Unknown preset '{self.preset}'") from None


def load_config(path: Path | None = None, **overrides) -> GeneratorConfig:
    """Load a GeneratorConfig from a YAML file.

    A missing path yields the defaults. Keyword overrides whose value is None
    are ignored.
    """
    data = {}
    if path is not None and path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping")

    for key, value in overrides.items():
        if value is None:
            continue
        alias = GeneratorConfig.model_fields[key].alias
        if alias:
            data.pop(alias, None)
        data[key] = value

    try:
        config = GeneratorConfig(**data)
    except ValidationError as e:
        raise ConfigError(str(e)) from e

    if config.preset not in config.presets:
        raise ConfigError(f"Unknown preset '{config.preset}'")
    return config
