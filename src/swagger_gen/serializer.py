"""Serializes generated documents to JSON or YAML."""

import json
from pathlib import Path

import yaml

from swagger_gen.model.document import SwaggerDocument


def to_dict(document: SwaggerDocument) -> dict:
    """Wire form: camelCase keys, unset fields omitted, vendor extensions inlined."""
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_json(document: SwaggerDocument, indent: int | None = 2) -> str:
    return json.dumps(to_dict(document), indent=indent, ensure_ascii=False)


def dump_yaml(document: SwaggerDocument) -> str:
    return yaml.safe_dump(to_dict(document), sort_keys=False, allow_unicode=True)


def detect_format(file_path: Path) -> str:
    """Pick the output format from the file extension: 'yaml' or 'json'."""
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"


def dump(document: SwaggerDocument, fmt: str) -> str:
    if fmt == "yaml":
        return dump_yaml(document)
    return dump_json(document)
