"""Serializes a generated document to JSON or YAML."""

import json

import yaml

FORMATS = ("json", "yaml")


def dump_document(document: dict, fmt: str = "json") -> str:
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unsupported format: {fmt}")
