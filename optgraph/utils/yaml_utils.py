"""Helpers for values produced by YAML parsing."""

from typing import Any, Dict, Hashable, TypeVar

V = TypeVar("V")


def yaml_name(value: Hashable) -> str:
    """Return the canonical string form of a YAML scalar used as a name.

    YAML 1.1 turns unquoted ``yes``/``no``/``on``/``off`` into booleans and
    bare digits into integers. Names are compared as strings, so ``1`` and
    ``"1"`` refer to the same node.

    Examples:
        >>> yaml_name(True)
        'True'
        >>> yaml_name(7)
        '7'
    """
    return str(value)


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Return a copy of ``data`` with every key converted by `yaml_name`.

    Raises:
        ValueError: If two keys collapse onto the same name (e.g. ``1`` and
            ``"1"``).
    """
    normalized: Dict[str, V] = {}
    for key, value in data.items():
        name = yaml_name(key)
        if name in normalized:
            raise ValueError(f"Duplicate key '{name}' after normalization")
        normalized[name] = value
    return normalized
