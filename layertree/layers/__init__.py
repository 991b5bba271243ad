"""Layer node model and pure tree primitives.

Defines ``Layer`` with its ``LayerKind`` discriminant.
Also provides lookup and copy-on-write edit helpers over forests of roots.
"""

from __future__ import annotations

from .tree import (
    collect_subtree_ids,
    find_containing_root,
    find_layer_by_id,
    remove_layer_from_tree,
    replace_layer_in_tree,
    walk_layers,
)
from .types import Layer, LayerKind, new_group, new_layer_id, new_leaf, new_root

__all__ = [
    "Layer",
    "LayerKind",
    "new_layer_id",
    "new_root",
    "new_group",
    "new_leaf",
    "walk_layers",
    "find_layer_by_id",
    "find_containing_root",
    "collect_subtree_ids",
    "replace_layer_in_tree",
    "remove_layer_from_tree",
]
