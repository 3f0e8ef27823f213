"""
Layered configuration merging for snskills.

Later layers win. A layer may also extend or prune list values instead of
replacing them by prefixing the key with "+" or "-".
"""

from typing import Any

APPEND_PREFIX = "+"
REMOVE_PREFIX = "-"


def _appended(existing: Any, items: list[Any]) -> list[Any]:
    if not isinstance(existing, list):
        return list(items)
    return existing + [item for item in items if item not in existing]


def _pruned(existing: list[Any], items: list[Any]) -> list[Any]:
    return [item for item in existing if item not in items]


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge one configuration layer over another.

    - Nested mappings merge key by key.
    - Any other value replaces the base value; None deletes the key.
    - "+name": [...] appends the items missing from base["name"].
    - "-name": [...] drops those items from base["name"] if it is a list.

    Neither argument is modified.

    Examples:
        >>> deep_merge({"skills": {"max_workers": 1}}, {"skills": {"max_workers": 4}})
        {'skills': {'max_workers': 4}}

        >>> deep_merge({"items": ["a"]}, {"+items": ["a", "b"]})
        {'items': ['a', 'b']}
    """
    merged = dict(base)

    for key, value in override.items():
        prefix, name = key[:1], key[1:]

        if prefix == APPEND_PREFIX and isinstance(value, list):
            merged[name] = _appended(merged.get(name), value)
        elif prefix == REMOVE_PREFIX and isinstance(value, list):
            if isinstance(merged.get(name), list):
                merged[name] = _pruned(merged[name], value)
        elif value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Fold layers left to right; empty layers are skipped."""
    merged: dict[str, Any] = {}
    for layer in filter(None, configs):
        merged = deep_merge(merged, layer)
    return merged


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """
    Assign value at a dotted key path in place, replacing non-mapping parents.

    Examples:
        >>> set_nested_value({}, "skills.root", "/srv/skills")
        {'skills': {'root': '/srv/skills'}}
    """
    *parents, leaf = key_path.split(".")

    node = config
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child

    node[leaf] = value
    return config
