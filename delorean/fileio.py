"""Reading and writing YAML, JSON and plain files."""

import copy
import dataclasses
import json
import os
from typing import Any, Iterable

import yaml

MAPPING_FILE = "image_mirror_mapping"

_K8S_IGNORED_KEYS = ("status", "creationTimestamp")


def _plain(obj: Any) -> Any:
    """Turn dataclass instances into dictionaries; leave anything else alone."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return obj


def read_yaml(yaml_file: str) -> Any:
    """Load and return the content of a YAML file."""
    with open(yaml_file, encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def read_json(json_file: str) -> Any:
    """Load and return the content of a JSON file."""
    with open(json_file, encoding="utf-8") as handle:
        return json.load(handle)


def _dump_yaml(data: Any, yaml_file: str) -> None:
    text = yaml.safe_dump(
        data, default_flow_style=False, sort_keys=True, allow_unicode=True
    )
    with open(yaml_file, "w", encoding="utf-8") as handle:
        handle.write(text)


def write_object_to_yaml(obj: Any, yaml_file: str) -> None:
    """Write ``obj`` to ``yaml_file`` as YAML with sorted keys."""
    _dump_yaml(_plain(obj), yaml_file)


def _delete_key(data: dict, key: str) -> None:
    """Remove ``key`` at the shallowest level of ``data`` where it appears."""
    if key in data:
        del data[key]
        return
    for value in data.values():
        if isinstance(value, dict):
            _delete_key(value, key)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, dict):
                    _delete_key(item, key)


def write_k8s_object_to_yaml(obj: Any, yaml_file: str) -> None:
    """Write a Kubernetes object as YAML, leaving out its status and creation time."""
    data = copy.deepcopy(_plain(obj))
    if isinstance(data, dict):
        for key in _K8S_IGNORED_KEYS:
            _delete_key(data, key)
    _dump_yaml(data, yaml_file)


def write_object_to_json(obj: Any, json_file: str) -> None:
    """Write ``obj`` to ``json_file`` as compact JSON, replacing its content."""
    text = json.dumps(_plain(obj), separators=(",", ":"), ensure_ascii=False)
    with open(json_file, "w", encoding="utf-8") as handle:
        handle.write(text)


def file_exists(filename: str) -> bool:
    """True when ``filename`` exists and is not a directory."""
    return os.path.exists(filename) and not os.path.isdir(filename)


def write_to_file(write_path: str, content: Iterable[str]) -> None:
    """Write the given lines to ``write_path``, joined by newlines."""
    with open(write_path, "w", encoding="utf-8") as handle:
        handle.write("\n".join(content))


def file_as_bytes(path: str) -> bytes:
    """Return the whole content of ``path``."""
    with open(path, "rb") as handle:
        return handle.read()