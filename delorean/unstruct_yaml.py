"""Editing single values of a YAML document while keeping its field order."""

from typing import Any

import yaml


def _set_value(node: Any, path: list[str], value: Any) -> None:
    key, rest = path[0], path[1:]
    if isinstance(node, dict):
        if key not in node:
            raise ValueError(f"failed to find key {key} in object {node!r}")
        if rest:
            _set_value(node[key], rest, value)
        else:
            node[key] = value
        return
    if isinstance(node, list):
        try:
            index = int(key)
        except ValueError:
            raise ValueError(
                f"failed to convert key {key} in int in object {node!r}"
            ) from None
        if not 0 <= index < len(node):
            raise ValueError(f"index {index} is out of range in object {node!r}")
        if rest:
            _set_value(node[index], rest, value)
        else:
            node[index] = value
        return
    raise ValueError(f"unknown type {type(node).__name__} in object {node!r}")


class UnstructYaml:
    """A YAML mapping whose values can be changed without reordering or losing fields."""

    def __init__(self, data: dict) -> None:
        self._data = data

    def set(self, path: str, value: Any) -> None:
        """Set the field at the dotted ``path`` to an int, bool or str ``value``."""
        if not isinstance(value, (int, str)):
            raise TypeError(f"unsupported value of type {type(value).__name__}")
        _set_value(self._data, path.split("."), value)

    def write(self, file: str) -> None:
        """Write the document to ``file``."""
        text = yaml.safe_dump(
            self._data, default_flow_style=False, sort_keys=False, allow_unicode=True
        )
        with open(file, "w", encoding="utf-8") as handle:
            handle.write(text)


def load_unstruct_yaml(file: str) -> UnstructYaml:
    """Parse the YAML mapping in ``file``."""
    with open(file, encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"the document in {file} is not a mapping")
    return UnstructYaml(data)