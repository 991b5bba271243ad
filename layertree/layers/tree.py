"""Pure query and copy-on-write edit helpers over layer forests.

Edits rebuild only the path from a root down to the target layer.
Every untouched subtree is shared by reference with the input tree.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..errors import LayerNotFoundError
from .types import Layer


def walk_layers(layer: Layer) -> Iterator[Layer]:
    """Yield ``layer`` and all of its descendants in pre-order."""
    stack = [layer]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def find_layer_by_id(roots: Iterable[Layer], layer_id: str) -> Layer | None:
    """Return the first layer with ``layer_id`` anywhere in ``roots``, else ``None``."""
    for root in roots:
        for layer in walk_layers(root):
            if layer.id == layer_id:
                return layer
    return None


def find_containing_root(roots: Iterable[Layer], layer_id: str) -> Layer | None:
    """Return the root whose subtree (root included) contains ``layer_id``."""
    for root in roots:
        if any(layer.id == layer_id for layer in walk_layers(root)):
            return root
    return None


def collect_subtree_ids(layer: Layer) -> set[str]:
    return {node.id for node in walk_layers(layer)}


def _replace_in(layer: Layer, replacement: Layer) -> Layer | None:
    """Return a rebuilt ``layer`` with ``replacement`` swapped in, or ``None`` if absent."""
    if layer.id == replacement.id:
        return replacement
    for idx, child in enumerate(layer.children):
        rebuilt = _replace_in(child, replacement)
        if rebuilt is not None:
            children = layer.children[:idx] + (rebuilt,) + layer.children[idx + 1 :]
            return layer.with_children(children)
    return None


def replace_layer_in_tree(root: Layer, replacement: Layer) -> Layer:
    """Return a copy of ``root`` where the layer sharing ``replacement.id`` is replaced.

    Raises ``LayerNotFoundError`` when no such layer exists under ``root``.
    """
    rebuilt = _replace_in(root, replacement)
    if rebuilt is None:
        raise LayerNotFoundError(replacement.id)
    return rebuilt


def _remove_from(layer: Layer, layer_id: str) -> Layer | None:
    for idx, child in enumerate(layer.children):
        if child.id == layer_id:
            return layer.with_children(layer.children[:idx] + layer.children[idx + 1 :])
        rebuilt = _remove_from(child, layer_id)
        if rebuilt is not None:
            children = layer.children[:idx] + (rebuilt,) + layer.children[idx + 1 :]
            return layer.with_children(children)
    return None


def remove_layer_from_tree(root: Layer, layer_id: str) -> Layer | None:
    """Return a copy of ``root`` with ``layer_id`` spliced out of its parent.

    Returns ``None`` when ``layer_id`` is the root itself, meaning the caller
    should drop the whole root. Raises ``LayerNotFoundError`` when absent.
    """
    if root.id == layer_id:
        return None
    rebuilt = _remove_from(root, layer_id)
    if rebuilt is None:
        raise LayerNotFoundError(layer_id)
    return rebuilt


__all__ = [
    "walk_layers",
    "find_layer_by_id",
    "find_containing_root",
    "collect_subtree_ids",
    "replace_layer_in_tree",
    "remove_layer_from_tree",
]
