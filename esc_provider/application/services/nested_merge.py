"""
Application service: deep, right-biased merge of property maps with dotted keys.

A key such as ``"db.user"`` addresses the path ``db → user``; it merges exactly
like ``{"db": {"user": ...}}``. Every map in the result is freshly built, so
neither input is mutated or aliased by the output.

Only the top-level keys of each input are split; keys inside map values are
kept verbatim (``{"labels": {"app.kubernetes.io/name": ...}}`` stays intact).
Splitting is literal: every ``.`` separates a segment, so leading, trailing
or doubled dots produce empty-string segments (``".a"`` → ``["", "a"]``).
Pure Python — no external dependencies.
"""

import copy
from collections.abc import Mapping
from typing import Any

SEPARATOR = "."


def merge_maps(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *overlay* onto *base* and return a new nested dict.

    Entries of *base* are inserted first, then entries of *overlay*. Maps
    sharing a path are merged member by member; where one side has a map and
    the other a scalar at the same path, the later insertion replaces the node.
    """
    merged: dict[str, Any] = {}
    for source in (base, overlay):
        for key, value in source.items():
            _insert(merged, split_key(key), value)
    return merged


def split_key(key: str) -> list[str]:
    return key.split(SEPARATOR)


def _insert(target: dict[str, Any], path: list[str], value: Any) -> None:
    *parents, leaf = path
    node = target
    for segment in parents:
        node = _child_map(node, segment)

    if isinstance(value, Mapping):
        child = _child_map(node, leaf)
        for key, item in value.items():
            # Member keys of a map value are literal, never dotted paths.
            _insert(child, [key], item)
    else:
        node[leaf] = copy.deepcopy(value)


def _child_map(node: dict[str, Any], segment: str) -> dict[str, Any]:
    """Return the map stored at *segment*, replacing any non-map node."""
    child = node.get(segment)
    if not isinstance(child, dict):
        child = node[segment] = {}
    return child
