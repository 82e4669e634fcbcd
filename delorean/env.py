"""Editing Kubernetes container environment variable lists."""

from typing import Any


def _replace_or_append(env_vars: list[dict[str, Any]], entry: dict[str, Any]) -> list[dict[str, Any]]:
    for index, env in enumerate(env_vars):
        if env.get("name") == entry["name"]:
            env_vars[index] = entry
            return env_vars
    env_vars.append(entry)
    return env_vars


def add_or_update_env_var(env_vars: list[dict[str, Any]], name: str, value: str) -> list[dict[str, Any]]:
    """Set ``name`` to ``value`` in ``env_vars``, replacing any entry of that name."""
    return _replace_or_append(env_vars, {"name": name, "value": value})


def add_or_update_env_var_with_source(
    env_vars: list[dict[str, Any]], name: str, value: str, field_path: str
) -> list[dict[str, Any]]:
    """Like :func:`add_or_update_env_var`, with a field reference as value source."""
    entry = {
        "name": name,
        "value": value,
        "valueFrom": {"fieldRef": {"fieldPath": field_path}},
    }
    return _replace_or_append(env_vars, entry)